"""GenerateInvoicePdf Use Case

Renders an invoice as PDF with its line items, GST breakdown and cumulative
fee block.
"""

import base64
from datetime import datetime
from src.libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.pdf_service import PdfService
from .dtos import InvoicePdfDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist in the organization
    2. Draft invoices render as PROFORMA, all others as TAX INVOICE
    3. Returns PDF as base64-encoded string

    Flow:
    1. Retrieve invoice, its line items and organization
    2. Generate PDF using PDF service
    3. Return response with PDF as base64
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        organization_repo: OrganizationRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.organization_repo = organization_repo
        self.pdf_service = pdf_service

    async def execute(self, invoice_id: int, organization_id: int) -> Result[InvoicePdfDTO]:
        try:
            # Step 1: Retrieve invoice and organization
            invoice = await self.invoice_repo.get_by_id(invoice_id, organization_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
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

            invoice_lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            # Step 2: Generate PDF
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                organization=organization,
                invoice_lines=invoice_lines,
            )

            # Step 3: Build response
            return Return.ok(
                InvoicePdfDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=datetime.utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
