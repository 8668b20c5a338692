"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, List
from datetime import date
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Invoice numbers are unique. reserve_and_create is the only way to insert
    an invoice and must fail with InvoiceNumberConflictError instead of
    overwriting when the number is already taken.
    """

    @abstractmethod
    async def reserve_and_create(self, invoice: Invoice) -> Invoice:
        """
        Atomically insert an invoice under its invoice_number

        Args:
            invoice: Invoice entity with invoice_number already assigned

        Returns:
            Created Invoice with generated ID

        Raises:
            InvoiceNumberConflictError: invoice_number already exists
        """
        pass

    @abstractmethod
    async def get_max_sequence(self, prefix: str) -> int:
        """
        Highest numeric suffix among invoice numbers starting with prefix

        Invoice numbers are unique across organizations, so the scan is not
        scoped to one organization: two organizations deriving the same code
        share a sequence instead of colliding.

        Args:
            prefix: Number prefix (e.g., ACME-2024-)

        Returns:
            Maximum sequence, 0 if no invoice matches
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, organization_id: Optional[int] = None) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            organization_id: Optional tenant scope

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_project_id(self, organization_id: int, project_id: int) -> List[Invoice]:
        """
        Retrieve all invoices of a project, newest first

        Args:
            organization_id: Organization ID
            project_id: Project ID

        Returns:
            List of invoices (all statuses)
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def count_by_status(self, organization_id: int, status: Optional[InvoiceStatus] = None) -> int:
        """
        Count invoices of an organization

        Args:
            organization_id: Organization ID
            status: Optional status filter (None counts all)

        Returns:
            Number of invoices
        """
        pass

    @abstractmethod
    async def count_overdue(self, organization_id: int, today: date) -> int:
        """Count invoices past due_date that are neither paid nor cancelled"""
        pass

    @abstractmethod
    async def total_outstanding(self, organization_id: int) -> Decimal:
        """Sum of balance_amount over invoices that are neither paid nor cancelled"""
        pass

    @abstractmethod
    async def revenue_between(self, organization_id: int, start: date, end: date) -> Decimal:
        """Sum of total_amount of PAID invoices issued between start and end"""
        pass
