"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.financial_health import DimensionMetrics, FinancialHealthSnapshot, OverallMetrics
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine


class InvoiceLineCommandDTO(BaseModel):
    """Line item of an invoice not billed against a project fee"""

    description: str = Field(..., min_length=1, max_length=255)
    item_type: Optional[str] = Field(default=None, max_length=50)
    quantity: Decimal = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)


class InvoiceLineDTO(BaseModel):
    line_id: int
    description: str
    item_type: Optional[str] = None
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal

    @classmethod
    def from_entity(cls, line: InvoiceLine) -> "InvoiceLineDTO":
        return cls(
            line_id=line.id,
            description=line.description,
            item_type=line.item_type,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line.total_price,
        )


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Project invoices bill the difference between the target cumulative
    percentage and what earlier invoices covered. Other invoices bill the sum
    of their line items, or the explicit subtotal when there are no lines.
    """

    organization_id: int = Field(
        ...,
        description="Issuing organization"
    )

    project_id: Optional[int] = Field(
        default=None,
        description="Project being billed (optional)"
    )

    target_cumulative_percentage: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Cumulative share of the fee billed after this invoice: a fraction "
                    "(0.40 = 40%) or, above 1, a percentage (40 = 40%). "
                    "Defaults to the project stage schedule."
    )

    subtotal: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Explicit subtotal for invoices not billed against a project fee"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Tax rate in percent (e.g., 18)"
    )

    client_name: Optional[str] = Field(default=None, description="Client name override")
    client_email: Optional[str] = Field(default=None)
    client_address: Optional[str] = Field(default=None)
    client_state: Optional[str] = Field(
        default=None,
        description="Client state for invoices without a project client"
    )

    issue_date: Optional[date] = Field(default=None, description="Defaults to today")
    due_date: Optional[date] = Field(default=None, description="Defaults to issue_date + payment terms")
    notes: Optional[str] = Field(default=None)

    lines: List[InvoiceLineCommandDTO] = Field(
        default_factory=list,
        description="Line items; not allowed on invoices billed against a project fee"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "organization_id": 1,
                "project_id": 42,
                "target_cumulative_percentage": "0.45",
                "tax_rate": "18",
            }
        }


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    status is the effective status: OVERDUE when past due and unpaid.
    lines is None when the operation did not load the line items.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    organization_id: int
    project_id: Optional[int] = None
    invoice_number: str
    client_name: str
    client_state: Optional[str] = None
    status: str
    is_overdue: bool
    issue_date: date
    due_date: date
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    cgst_rate: Decimal
    cgst_amount: Decimal
    sgst_rate: Decimal
    sgst_amount: Decimal
    igst_rate: Decimal
    igst_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal
    cumulative_fee_percentage: Optional[Decimal] = None
    cumulative_fee_amount: Optional[Decimal] = None
    previously_billed_amount: Decimal
    last_payment_date: Optional[date] = None
    notes: Optional[str] = None
    lines: Optional[List[InvoiceLineDTO]] = None
    created_at: datetime

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        today: Optional[date] = None,
        lines: Optional[List[InvoiceLine]] = None,
    ) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            organization_id=invoice.organization_id,
            project_id=invoice.project_id,
            invoice_number=invoice.invoice_number,
            client_name=invoice.client_name,
            client_state=invoice.client_state,
            status=invoice.effective_status(today).value,
            is_overdue=invoice.is_overdue(today),
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            subtotal=invoice.subtotal,
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            cgst_rate=invoice.cgst_rate,
            cgst_amount=invoice.cgst_amount,
            sgst_rate=invoice.sgst_rate,
            sgst_amount=invoice.sgst_amount,
            igst_rate=invoice.igst_rate,
            igst_amount=invoice.igst_amount,
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            balance_amount=invoice.balance_amount,
            cumulative_fee_percentage=invoice.cumulative_fee_percentage,
            cumulative_fee_amount=invoice.cumulative_fee_amount,
            previously_billed_amount=invoice.previously_billed_amount,
            last_payment_date=invoice.last_payment_date,
            notes=invoice.notes,
            lines=None if lines is None else [InvoiceLineDTO.from_entity(line) for line in lines],
            created_at=invoice.created_at,
        )


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for editing a draft invoice

    Fields left as None keep their current value. lines replaces every line
    item when given.
    """

    invoice_id: int
    organization_id: int
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_address: Optional[str] = None
    client_state: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None
    lines: Optional[List[InvoiceLineCommandDTO]] = None


class RecordPaymentCommandDTO(BaseModel):
    """Command DTO for recording a full payment"""

    invoice_id: int
    organization_id: int
    amount: Decimal = Field(..., gt=0, description="Must equal the invoice total")
    payment_date: Optional[date] = Field(default=None, description="Defaults to today")


class UpdateInvoiceStatusCommandDTO(BaseModel):
    invoice_id: int
    organization_id: int
    status: str = Field(..., description="Target status (DRAFT, SENT, CANCELLED)")


class NextInvoiceNumberDTO(BaseModel):
    """Preview of the next invoice number (not reserved)"""

    organization_id: int
    year: int
    prefix: str
    invoice_number: str


class InvoiceStatisticsDTO(BaseModel):
    """Invoice counts and totals of an organization"""

    organization_id: int
    total_invoices: int
    draft_invoices: int
    paid_invoices: int
    overdue_invoices: int
    total_outstanding: Decimal
    yearly_revenue: Decimal


class InvoicePdfDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    pdf_base64: str
    generated_at: datetime


class OverallMetricsDTO(BaseModel):
    total_active_projects: int
    total_invoices: int
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    total_budget: Decimal
    total_actual_cost: Decimal
    collection_rate: float

    @classmethod
    def from_metrics(cls, metrics: OverallMetrics) -> "OverallMetricsDTO":
        return cls(
            total_active_projects=metrics.total_active_projects,
            total_invoices=metrics.total_invoices,
            total_invoiced=metrics.total_invoiced,
            total_paid=metrics.total_paid,
            total_outstanding=metrics.total_outstanding,
            total_budget=metrics.total_budget,
            total_actual_cost=metrics.total_actual_cost,
            collection_rate=float(metrics.collection_rate),
        )


class DimensionMetricsDTO(BaseModel):
    key: str
    display_name: str
    project_count: int
    invoice_count: int
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    collection_rate: float

    @classmethod
    def from_metrics(cls, metrics: DimensionMetrics) -> "DimensionMetricsDTO":
        return cls(
            key=metrics.key,
            display_name=metrics.display_name,
            project_count=metrics.project_count,
            invoice_count=metrics.invoice_count,
            total_invoiced=metrics.total_invoiced,
            total_paid=metrics.total_paid,
            total_outstanding=metrics.total_outstanding,
            collection_rate=float(metrics.collection_rate),
        )


class FinancialHealthResponseDTO(BaseModel):
    """
    Response DTO for the financial health dashboard

    overall covers invoices of active projects; all_invoices covers every
    invoice. The project count, budget and actual cost of both views describe
    active projects only.
    """

    organization_id: int
    overall: OverallMetricsDTO
    all_invoices: OverallMetricsDTO
    by_charge_type: List[DimensionMetricsDTO]
    by_project_stage: List[DimensionMetricsDTO]
    by_invoice_status: List[DimensionMetricsDTO]
    generated_at: datetime

    @classmethod
    def from_snapshot(cls, organization_id: int, snapshot: FinancialHealthSnapshot) -> "FinancialHealthResponseDTO":
        return cls(
            organization_id=organization_id,
            overall=OverallMetricsDTO.from_metrics(snapshot.active_overall),
            all_invoices=OverallMetricsDTO.from_metrics(snapshot.all_invoices_overall),
            by_charge_type=[DimensionMetricsDTO.from_metrics(m) for m in snapshot.by_charge_type],
            by_project_stage=[DimensionMetricsDTO.from_metrics(m) for m in snapshot.by_project_stage],
            by_invoice_status=[DimensionMetricsDTO.from_metrics(m) for m in snapshot.by_invoice_status],
            generated_at=datetime.utcnow(),
        )
