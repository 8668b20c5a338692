"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from decimal import Decimal
from typing import Optional, List
from datetime import date, datetime
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import IntegrityError
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import InvoiceNumberConflictError
from src.domain.invoice import Invoice, InvoiceStatus, SETTLED_STATUSES
from src.domain.invoice_numbering import max_sequence
from src.domain.money import quantize_money


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Unique invoice_number enforced by the database
    - Inserts run inside a SAVEPOINT so a number collision only rolls back
      the failed insert, not the surrounding transaction
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def reserve_and_create(self, invoice: Invoice) -> Invoice:
        """
        Insert invoice under its invoice_number

        Args:
            invoice: Invoice entity with invoice_number assigned

        Returns:
            Created Invoice with generated ID

        Raises:
            InvoiceNumberConflictError: invoice_number already exists
        """
        try:
            async with self.session.begin_nested():
                self.session.add(invoice)
                await self.session.flush()
        except IntegrityError:
            raise InvoiceNumberConflictError(invoice.invoice_number)

        await self.session.refresh(invoice)
        return invoice

    async def get_max_sequence(self, prefix: str) -> int:
        """
        Highest numeric suffix among invoice numbers starting with prefix

        Suffixes are parsed in Python; numbers with a non-numeric suffix
        are ignored.
        """
        statement = select(Invoice.invoice_number).where(
            Invoice.invoice_number.like(f"{prefix}%")
        )
        result = await self.session.execute(statement)
        return max_sequence(result.scalars().all(), prefix)

    async def get_by_id(self, invoice_id: int, organization_id: Optional[int] = None) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            organization_id: Optional tenant scope

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)
        if organization_id is not None:
            statement = statement.where(Invoice.organization_id == organization_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_project_id(self, organization_id: int, project_id: int) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.organization_id == organization_id)
            .where(Invoice.project_id == project_id)
            .order_by(Invoice.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def count_by_status(self, organization_id: int, status: Optional[InvoiceStatus] = None) -> int:
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.organization_id == organization_id)
        )
        if status:
            statement = statement.where(Invoice.status == status)
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def count_overdue(self, organization_id: int, today: date) -> int:
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.organization_id == organization_id)
            .where(Invoice.due_date < today)
            .where(Invoice.status.notin_(list(SETTLED_STATUSES)))
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def total_outstanding(self, organization_id: int) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Invoice.balance_amount), 0))
            .where(Invoice.organization_id == organization_id)
            .where(Invoice.status.notin_(list(SETTLED_STATUSES)))
        )
        result = await self.session.execute(statement)
        return quantize_money(result.scalar_one())

    async def revenue_between(self, organization_id: int, start: date, end: date) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Invoice.total_amount), 0))
            .where(Invoice.organization_id == organization_id)
            .where(Invoice.status == InvoiceStatus.PAID)
            .where(Invoice.issue_date >= start)
            .where(Invoice.issue_date <= end)
        )
        result = await self.session.execute(statement)
        return quantize_money(result.scalar_one())
