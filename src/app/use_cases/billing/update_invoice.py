"""UpdateInvoice Use Case

Edits the client details, dates, tax rate, notes and line items of a draft
invoice and recomputes its tax and totals.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_line import lines_subtotal
from src.domain.tax import compute_invoice_tax
from .create_invoice import build_invoice_lines
from .dtos import InvoiceResponseDTO, UpdateInvoiceCommandDTO

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Update draft invoice

    Business Rules:
    1. Only DRAFT invoices can be edited
    2. Cumulative fee fields are fixed at creation and never recomputed
    3. Line items replace the previous ones and set the subtotal; they are
       rejected on invoices billed against a project fee
    4. Tax is recomputed from the current client state and tax rate, with the
       same GST rules as creation
    5. total_amount and balance_amount are refreshed

    Flow:
    1. Retrieve invoice and organization
    2. Apply edited fields
    3. Replace line items
    4. Recompute tax and totals
    5. Persist and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        organization_repo: OrganizationRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.organization_repo = organization_repo

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Retrieve invoice and organization
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, command.organization_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            if invoice.status != InvoiceStatus.DRAFT:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Only draft invoices can be edited. "
                                f"Current status: {invoice.status.value}",
                        reason="Issued invoices are immutable",
                    )
                )

            if command.lines is not None and invoice.is_fee_billed:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_LINES",
                        message="Line items cannot be added to an invoice billed against the project fee",
                        reason="The subtotal of a progress invoice is fixed by cumulative billing",
                    )
                )

            organization = await self.organization_repo.get_by_id(invoice.organization_id)
            if not organization:
                return Return.err(
                    Error(
                        code="ORGANIZATION_NOT_FOUND",
                        message=f"Organization {invoice.organization_id} not found",
                        reason="Organization does not exist",
                    )
                )

            # Step 2: Apply edited fields
            if command.client_name is not None:
                invoice.client_name = command.client_name.strip()
            if command.client_email is not None:
                invoice.client_email = command.client_email
            if command.client_address is not None:
                invoice.client_address = command.client_address
            if command.client_state is not None:
                invoice.client_state = command.client_state
            if command.issue_date is not None:
                invoice.issue_date = command.issue_date
            if command.due_date is not None:
                invoice.due_date = command.due_date
            if command.notes is not None:
                invoice.notes = command.notes

            # Step 3: Replace line items
            subtotal = invoice.subtotal
            if command.lines is not None:
                lines = build_invoice_lines(command.lines)
                for line in lines:
                    line.invoice_id = invoice.id
                await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
                if lines:
                    lines = await self.invoice_line_repo.create_many(lines)
                subtotal = lines_subtotal(lines)
            else:
                lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            # Step 4: Recompute tax and totals
            rate = command.tax_rate if command.tax_rate is not None else invoice.tax_rate
            invoice.apply_tax_split(
                compute_invoice_tax(
                    subtotal,
                    organization.state,
                    invoice.client_state,
                    gst_rate=rate,
                    flat_rate=rate,
                    project_invoice=invoice.project_id is not None,
                )
            )

            # Step 5: Persist and commit
            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Updated draft invoice {updated.invoice_number}: "
                f"subtotal={updated.subtotal}, total={updated.total_amount}"
            )

            return Return.ok(InvoiceResponseDTO.from_entity(updated, lines=lines))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice update failed for invoice {command.invoice_id}: {e}")
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
