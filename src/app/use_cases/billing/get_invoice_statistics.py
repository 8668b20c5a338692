"""GetInvoiceStatistics Use Case

Invoice counts, outstanding balance and revenue of the current year.
"""

from datetime import date
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceStatisticsDTO


class GetInvoiceStatistics:
    """
    Use Case: Get invoice statistics of an organization

    Business Rules:
    1. overdue_invoices counts invoices past due that are neither paid nor cancelled
    2. total_outstanding sums balances of unpaid, uncancelled invoices
    3. yearly_revenue sums totals of PAID invoices issued in the current year
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, organization_id: int, today: Optional[date] = None) -> Result[InvoiceStatisticsDTO]:
        today = today or date.today()
        try:
            total = await self.invoice_repo.count_by_status(organization_id)
            draft = await self.invoice_repo.count_by_status(organization_id, InvoiceStatus.DRAFT)
            paid = await self.invoice_repo.count_by_status(organization_id, InvoiceStatus.PAID)
            overdue = await self.invoice_repo.count_overdue(organization_id, today)
            outstanding = await self.invoice_repo.total_outstanding(organization_id)
            revenue = await self.invoice_repo.revenue_between(
                organization_id,
                date(today.year, 1, 1),
                date(today.year, 12, 31),
            )

            return Return.ok(
                InvoiceStatisticsDTO(
                    organization_id=organization_id,
                    total_invoices=total,
                    draft_invoices=draft,
                    paid_invoices=paid,
                    overdue_invoices=overdue,
                    total_outstanding=outstanding,
                    yearly_revenue=revenue,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_STATISTICS_FAILED",
                    message="Failed to load invoice statistics",
                    reason=str(e),
                )
            )
