"""PDF Generation Service Interface

Defines the contract for invoice PDF rendering.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.organization import Organization


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF rendering for invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        organization: Organization,
        invoice_lines: List[InvoiceLine],
    ) -> bytes:
        """
        Render an invoice PDF

        Draft invoices render as a proforma; all other statuses as a tax
        invoice with the GST breakdown.

        Args:
            invoice: Invoice entity with billing details
            organization: Issuing organization (printed in the header)
            invoice_lines: Line items; empty for progress invoices

        Returns:
            PDF document as bytes
        """
        pass
