"""UpdateInvoiceStatus Use Case

Moves an invoice between DRAFT, SENT and CANCELLED.
"""

import logging
from datetime import datetime
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO, UpdateInvoiceStatusCommandDTO

logger = logging.getLogger(__name__)


class UpdateInvoiceStatus:
    """
    Use Case: Update invoice status

    Business Rules:
    1. OVERDUE is derived from due_date and can never be set
    2. PAID is only reachable through RecordPayment
    3. Paid invoices are final
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Validate requested status
            try:
                new_status = InvoiceStatus(command.status.strip().upper())
            except ValueError:
                return Return.err(
                    Error(
                        code="INVALID_STATUS",
                        message=f"Unknown invoice status: {command.status}",
                        reason=f"Allowed: {', '.join(s.value for s in InvoiceStatus)}",
                    )
                )

            if new_status == InvoiceStatus.OVERDUE:
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message="OVERDUE cannot be set manually",
                        reason="Overdue is derived from the due date",
                    )
                )

            if new_status == InvoiceStatus.PAID:
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message="Use the payments endpoint to mark an invoice as paid",
                        reason="PAID requires a recorded payment",
                    )
                )

            # Step 2: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, command.organization_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            if invoice.status == InvoiceStatus.PAID:
                return Return.err(
                    Error(
                        code="INVOICE_ALREADY_PAID",
                        message=f"Invoice {invoice.invoice_number} is already paid",
                        reason="Paid invoices are final",
                    )
                )

            # Step 3: Apply and persist
            previous = invoice.status
            invoice.status = new_status
            invoice.updated_at = datetime.utcnow()
            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Invoice {invoice.invoice_number} status {previous.value} -> {new_status.value}"
            )

            return Return.ok(InvoiceResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_STATUS_FAILED",
                    message="Failed to update invoice status",
                    reason=str(e),
                )
            )
