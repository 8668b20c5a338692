from .unit_of_work import UnitOfWork
from .invoice_sequencer import InvoiceSequencer
from .pdf_service import PdfService

__all__ = [
    "UnitOfWork",
    "InvoiceSequencer",
    "PdfService",
]
