"""RecordPayment Use Case

Records the full payment of an invoice.
"""

import logging
from datetime import date, datetime
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from src.domain.money import quantize_money
from .dtos import InvoiceResponseDTO, RecordPaymentCommandDTO

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record invoice payment

    Business Rules:
    1. Invoice must exist in the organization
    2. Only full payments are accepted: amount == total_amount
    3. Paid invoices cannot be paid again
    4. Cancelled invoices cannot be paid
    5. Payment sets paid_amount, balance_amount=0, last_payment_date and status=PAID

    Flow:
    1. Retrieve invoice
    2. Validate status and amount
    3. Apply payment
    4. Commit transaction
    5. Return response
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, command.organization_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Validate status and amount
            if invoice.status == InvoiceStatus.PAID:
                return Return.err(
                    Error(
                        code="INVOICE_ALREADY_PAID",
                        message=f"Invoice {invoice.invoice_number} is already paid",
                        reason="Paid invoices cannot receive further payments",
                    )
                )

            if invoice.status == InvoiceStatus.CANCELLED:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Invoice {invoice.invoice_number} is cancelled",
                        reason="Cancelled invoices cannot be paid",
                    )
                )

            amount = quantize_money(command.amount)
            total = quantize_money(invoice.total_amount)
            if amount != total:
                return Return.err(
                    Error(
                        code="PAYMENT_AMOUNT_MISMATCH",
                        message=f"Payment amount must equal invoice total. "
                                f"Expected: {total}, Received: {amount}",
                        reason="Partial payments are not supported",
                    )
                )

            # Step 3: Apply payment
            invoice.paid_amount = amount
            invoice.recalculate_balance()
            invoice.last_payment_date = command.payment_date or date.today()
            invoice.status = InvoiceStatus.PAID
            invoice.updated_at = datetime.utcnow()
            updated = await self.invoice_repo.update(invoice)

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(f"Recorded payment of {amount} for invoice {invoice.invoice_number}")

            # Step 5: Build response
            return Return.ok(InvoiceResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Recording payment for invoice {command.invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )
