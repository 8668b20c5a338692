"""CreateInvoice Use Case

Creates a draft progress-billing invoice: cumulative fee tracking, GST split
and a unique per-organization invoice number.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional
from config import ApplicationConfig
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_sequencer import InvoiceSequencer
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.organization_repository import ClientRepository, OrganizationRepository
from src.app.repositories.project_repository import ProjectRepository
from src.domain.cumulative_billing import (
    compute_cumulative_billing,
    cumulative_percentage_for_stage,
    previously_billed_amount,
)
from src.domain.errors import BillingError, SequenceAllocationError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine, line_total, lines_subtotal
from src.domain.invoice_numbering import invoice_prefix, organization_code
from src.domain.money import HUNDRED, ZERO
from src.domain.organization import Client
from src.domain.project import Project
from src.domain.tax import compute_invoice_tax
from .dtos import CreateInvoiceCommandDTO, InvoiceLineCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


def build_invoice_lines(lines: List[InvoiceLineCommandDTO]) -> List[InvoiceLine]:
    """Line entities with their totals; invoice_id is set once the invoice exists"""
    return [
        InvoiceLine(
            description=line.description.strip(),
            item_type=line.item_type,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line_total(line.quantity, line.unit_price),
        )
        for line in lines
    ]


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. Project invoices bill up to a cumulative share of the project fee;
       the share defaults to the project stage schedule
    2. Billing below the already billed amount or above the total fee is rejected
    3. Other invoices bill the sum of their line items (or an explicit subtotal);
       line items are rejected on invoices billed against a project fee
    4. Project invoices always get GST: CGST + SGST for same-state clients,
       IGST for all others, including an unknown client state
    5. Invoices without a project get GST when a client state is given,
       otherwise a flat tax at the explicit rate
    6. Invoice number is <code>-<year>-NNN, unique, allocated with bounded retry
    7. Invoice is created with status=DRAFT, due after the configured payment terms

    Flow:
    1. Load organization (and project, client)
    2. Compute cumulative billing for project invoices, or sum line items
    3. Compute tax
    4. Allocate invoice number and insert with its lines
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        organization_repo: OrganizationRepository,
        project_repo: ProjectRepository,
        client_repo: ClientRepository,
        sequencer: Optional[InvoiceSequencer] = None,
        default_tax_rate: Optional[Decimal] = None,
        payment_terms_days: Optional[int] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.organization_repo = organization_repo
        self.project_repo = project_repo
        self.client_repo = client_repo
        self.sequencer = sequencer or InvoiceSequencer(invoice_repo)
        self.default_tax_rate = Decimal(
            ApplicationConfig.DEFAULT_TAX_RATE if default_tax_rate is None else default_tax_rate
        )
        self.payment_terms_days = (
            ApplicationConfig.DEFAULT_PAYMENT_TERMS_DAYS if payment_terms_days is None else payment_terms_days
        )

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with organization, project and billing target

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        try:
            # Step 1: Load organization
            organization = await self.organization_repo.get_by_id(command.organization_id)
            if not organization:
                return Return.err(
                    Error(
                        code="ORGANIZATION_NOT_FOUND",
                        message=f"Organization {command.organization_id} not found",
                        reason="Organization does not exist",
                    )
                )

            project = None
            client = None
            if command.project_id is not None:
                project = await self.project_repo.get_by_id(command.project_id)
                if not project or project.organization_id != organization.id:
                    return Return.err(
                        Error(
                            code="PROJECT_NOT_FOUND",
                            message=f"Project {command.project_id} not found",
                            reason=f"No project {command.project_id} in organization {organization.id}",
                        )
                    )
                if project.client_id is not None:
                    client = await self.client_repo.get_by_id(project.client_id)

            issue_date = command.issue_date or date.today()
            invoice = Invoice(
                organization_id=organization.id,
                project_id=project.id if project else None,
                invoice_number="",
                client_name=self._client_name(command, client),
                client_email=command.client_email or (client.email if client else None),
                client_address=command.client_address or (client.billing_address if client else None),
                client_state=client.state if client else command.client_state,
                issue_date=issue_date,
                due_date=command.due_date or issue_date + timedelta(days=self.payment_terms_days),
                status=InvoiceStatus.DRAFT,
                notes=command.notes,
            )

            # Step 2: Cumulative billing or line items
            subtotal = command.subtotal if command.subtotal is not None else ZERO
            if project is not None:
                target = self._target_fraction(command, project)
                if target is not None and project.total_fee is not None:
                    prior_invoices = await self.invoice_repo.get_by_project_id(
                        organization.id, project.id
                    )
                    billing = compute_cumulative_billing(
                        total_fee=project.total_fee,
                        target_percentage=target,
                        previously_billed=previously_billed_amount(prior_invoices),
                    )
                    invoice.apply_cumulative_billing(billing)
                    subtotal = billing.subtotal

            lines = build_invoice_lines(command.lines)
            if lines:
                if invoice.is_fee_billed:
                    return Return.err(
                        Error(
                            code="INVALID_INVOICE_LINES",
                            message="Line items cannot be added to an invoice billed against the project fee",
                            reason="The subtotal of a progress invoice is fixed by cumulative billing",
                        )
                    )
                subtotal = lines_subtotal(lines)

            # Step 3: Tax
            invoice.apply_tax_split(
                compute_invoice_tax(
                    subtotal,
                    organization.state,
                    invoice.client_state,
                    gst_rate=command.tax_rate if command.tax_rate is not None else self.default_tax_rate,
                    flat_rate=command.tax_rate,
                    project_invoice=project is not None,
                )
            )

            # Step 4: Allocate number and insert
            prefix = invoice_prefix(
                organization_code(organization.name, organization.invoice_prefix),
                issue_date.year,
            )
            created_invoice = await self.sequencer.allocate(invoice, prefix)

            for line in lines:
                line.invoice_id = created_invoice.id
            if lines:
                lines = await self.invoice_line_repo.create_many(lines)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created invoice {created_invoice.invoice_number} for organization "
                f"{organization.id}: subtotal={created_invoice.subtotal}, "
                f"total={created_invoice.total_amount}, lines={len(lines)}"
            )

            # Step 6: Build response
            return Return.ok(InvoiceResponseDTO.from_entity(created_invoice, lines=lines))

        except SequenceAllocationError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=e.code,
                    message="Could not allocate a unique invoice number, please retry",
                    reason=str(e),
                )
            )

        except BillingError as e:
            await self.uow.rollback()
            logger.info(f"Invoice creation rejected for organization {command.organization_id}: {e}")
            return Return.err(
                Error(
                    code=e.code,
                    message=str(e),
                    reason="Cumulative billing invariant violated",
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice creation failed for organization {command.organization_id}: {e}")
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

    def _client_name(self, command: CreateInvoiceCommandDTO, client: Optional[Client]) -> str:
        if command.client_name and command.client_name.strip():
            return command.client_name.strip()
        return client.name if client else ""

    def _target_fraction(self, command: CreateInvoiceCommandDTO, project: Project) -> Optional[Decimal]:
        """Explicit target, else the stage schedule converted to a fraction"""
        if command.target_cumulative_percentage is not None:
            return command.target_cumulative_percentage
        scheduled = cumulative_percentage_for_stage(project.stage)
        if scheduled is None:
            return None
        return scheduled / HUNDRED
