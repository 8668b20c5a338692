"""Invoice Number Sequencer

Allocates ``<code>-<year>-<sequence>`` numbers per organization and year.

Reading the max sequence and inserting max+1 is a read-modify-write on
shared state. The unique constraint on invoice_number is the backstop: a
concurrent writer that took the same number makes reserve_and_create raise
InvoiceNumberConflictError, and allocation is retried with a fresh read a
bounded number of times.
"""

import logging
from typing import Optional
from config import ApplicationConfig
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import InvoiceNumberConflictError, SequenceAllocationError
from src.domain.invoice import Invoice
from src.domain.invoice_numbering import format_invoice_number

logger = logging.getLogger(__name__)


class InvoiceSequencer:
    """
    Allocates unique invoice numbers

    Usage:
        sequencer = InvoiceSequencer(invoice_repo, max_attempts=5)
        number = await sequencer.next_invoice_number(org_id, 2024, "ACME-2024-")
        created = await sequencer.allocate(invoice, "ACME-2024-")
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        max_attempts: Optional[int] = None,
        padding: Optional[int] = None,
    ):
        if max_attempts is None:
            max_attempts = ApplicationConfig.INVOICE_SEQUENCE_MAX_ATTEMPTS
        if padding is None:
            padding = ApplicationConfig.INVOICE_NUMBER_PADDING
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.invoice_repo = invoice_repo
        self.max_attempts = max_attempts
        self.padding = padding

    async def next_invoice_number(self, organization_id: int, year: int, prefix: str) -> str:
        """
        Next free invoice number for the organization and year

        This is a read only; the number is not reserved until allocate()
        inserts the invoice.

        Args:
            organization_id: Organization ID
            year: Billing year (part of prefix, used for logging)
            prefix: Number prefix, e.g. "ACME-2024-"

        Returns:
            prefix followed by the zero-padded max sequence + 1
        """
        current = await self.invoice_repo.get_max_sequence(prefix)
        number = format_invoice_number(prefix, current + 1, self.padding)
        logger.debug(f"Next invoice number for organization {organization_id}/{year}: {number}")
        return number

    async def allocate(self, invoice: Invoice, prefix: str) -> Invoice:
        """
        Assign the next number to invoice and insert it

        Args:
            invoice: Invoice to insert (invoice_number is overwritten)
            prefix: Number prefix, e.g. "ACME-2024-"

        Returns:
            Created invoice

        Raises:
            SequenceAllocationError: every attempt collided with another writer
        """
        for attempt in range(1, self.max_attempts + 1):
            current = await self.invoice_repo.get_max_sequence(prefix)
            invoice.invoice_number = format_invoice_number(prefix, current + 1, self.padding)
            try:
                return await self.invoice_repo.reserve_and_create(invoice)
            except InvoiceNumberConflictError as e:
                logger.warning(
                    f"Invoice number {e.invoice_number} taken "
                    f"(attempt {attempt}/{self.max_attempts}), retrying"
                )

        logger.error(
            f"Invoice number allocation exhausted for organization "
            f"{invoice.organization_id} prefix {prefix}"
        )
        raise SequenceAllocationError(prefix, self.max_attempts)
