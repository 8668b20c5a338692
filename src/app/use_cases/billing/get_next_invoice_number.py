"""GetNextInvoiceNumber Use Case

Previews the number the next invoice of an organization would receive.
"""

from datetime import date
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.invoice_sequencer import InvoiceSequencer
from src.domain.invoice_numbering import invoice_prefix, organization_code
from .dtos import NextInvoiceNumberDTO


class GetNextInvoiceNumber:
    """
    Use Case: Preview next invoice number

    The number is not reserved; a concurrent CreateInvoice may take it.
    """

    def __init__(self, organization_repo: OrganizationRepository, sequencer: InvoiceSequencer):
        self.organization_repo = organization_repo
        self.sequencer = sequencer

    async def execute(self, organization_id: int, year: Optional[int] = None) -> Result[NextInvoiceNumberDTO]:
        try:
            organization = await self.organization_repo.get_by_id(organization_id)
            if not organization:
                return Return.err(
                    Error(
                        code="ORGANIZATION_NOT_FOUND",
                        message=f"Organization {organization_id} not found",
                        reason="Organization does not exist",
                    )
                )

            year = year or date.today().year
            prefix = invoice_prefix(
                organization_code(organization.name, organization.invoice_prefix), year
            )
            number = await self.sequencer.next_invoice_number(organization_id, year, prefix)

            return Return.ok(
                NextInvoiceNumberDTO(
                    organization_id=organization_id,
                    year=year,
                    prefix=prefix,
                    invoice_number=number,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="NEXT_INVOICE_NUMBER_FAILED",
                    message="Failed to compute next invoice number",
                    reason=str(e),
                )
            )
