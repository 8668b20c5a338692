"""DeleteInvoice Use Case"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice import InvoiceStatus

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete a draft invoice

    Only DRAFT invoices can be deleted; issued invoices are cancelled instead.
    Line items are deleted with the invoice.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, invoice_id: int, organization_id: int) -> Result[bool]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, organization_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            if invoice.status != InvoiceStatus.DRAFT:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Only draft invoices can be deleted. "
                                f"Current status: {invoice.status.value}",
                        reason="Issued invoices must be cancelled instead",
                    )
                )

            await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Deleted draft invoice {invoice.invoice_number}")
            return Return.ok(True)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
