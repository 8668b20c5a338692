"""Billing domain use cases"""
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .record_payment import RecordPayment
from .update_invoice_status import UpdateInvoiceStatus
from .delete_invoice import DeleteInvoice
from .get_invoice_statistics import GetInvoiceStatistics
from .get_next_invoice_number import GetNextInvoiceNumber
from .generate_invoice_pdf import GenerateInvoicePdf
from .get_financial_health import GetFinancialHealth
from .dtos import (
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    InvoiceLineCommandDTO,
    InvoiceLineDTO,
    InvoiceResponseDTO,
    RecordPaymentCommandDTO,
    UpdateInvoiceStatusCommandDTO,
    NextInvoiceNumberDTO,
    InvoiceStatisticsDTO,
    InvoicePdfDTO,
    FinancialHealthResponseDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoice",
    "RecordPayment",
    "UpdateInvoiceStatus",
    "DeleteInvoice",
    "GetInvoiceStatistics",
    "GetNextInvoiceNumber",
    "GenerateInvoicePdf",
    "GetFinancialHealth",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "InvoiceLineCommandDTO",
    "InvoiceLineDTO",
    "InvoiceResponseDTO",
    "RecordPaymentCommandDTO",
    "UpdateInvoiceStatusCommandDTO",
    "NextInvoiceNumberDTO",
    "InvoiceStatisticsDTO",
    "InvoicePdfDTO",
    "FinancialHealthResponseDTO",
]
