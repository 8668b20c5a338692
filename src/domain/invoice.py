"""Invoice Domain Entity

Tracks progress-billing invoices, their GST split and payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Date, Text
from src.domain.base import BaseModel, IdType
from src.domain.money import ZERO, quantize_money, to_decimal

if TYPE_CHECKING:
    from src.domain.tax import TaxSplit
    from src.domain.cumulative_billing import CumulativeBilling


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# Statuses that close an invoice; closed invoices are never overdue
SETTLED_STATUSES = frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED})


class Invoice(BaseModel, table=True):
    """
    Invoice - Progress-billing invoice of an organization

    Domain Rules:
    - invoice_number must be unique
    - total_amount = subtotal + tax_amount
    - balance_amount = total_amount - paid_amount
    - cumulative_fee_amount = previously_billed_amount + subtotal
    - Cumulative fields are fixed at creation and never recomputed
    - OVERDUE is derived from due_date, never stored by the engine
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_organization_id', 'organization_id'),
        Index('ix_invoices_project_id', 'project_id'),
        Index('ix_invoices_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    organization_id: int = Field(
        foreign_key="organizations.id",
        description="Issuing organization"
    )

    project_id: Optional[int] = Field(
        default=None,
        foreign_key="projects.id",
        description="Billed project (optional)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., ACME-2024-001)"
    )

    client_name: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False, default=""),
        description="Client name printed on the invoice"
    )

    client_email: Optional[str] = Field(default=None)

    client_state: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Client state the GST split was computed against"
    )

    client_address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status"
    )

    subtotal: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    tax_rate: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
    )

    tax_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    cgst_rate: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Central GST rate (intra-state)"
    )

    cgst_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    sgst_rate: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="State GST rate (intra-state)"
    )

    sgst_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    igst_rate: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Integrated GST rate (inter-state)"
    )

    igst_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    total_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    paid_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    balance_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
    )

    cumulative_fee_percentage: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(5, 2), nullable=True),
        description="Fee percentage billed up to and including this invoice"
    )

    cumulative_fee_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(15, 2), nullable=True),
        description="Fee amount billed up to and including this invoice"
    )

    previously_billed_amount: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False, default=0),
        description="Sum of subtotals of prior non-cancelled invoices"
    )

    last_payment_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def is_fee_billed(self) -> bool:
        """Billed against a project fee; the subtotal is fixed by cumulative billing"""
        return self.cumulative_fee_amount is not None

    def apply_tax_split(self, split: "TaxSplit") -> None:
        """Copy a computed tax split onto the invoice and refresh totals"""
        self.subtotal = split.subtotal
        self.tax_rate = split.tax_rate
        self.cgst_rate = split.cgst_rate
        self.cgst_amount = split.cgst_amount
        self.sgst_rate = split.sgst_rate
        self.sgst_amount = split.sgst_amount
        self.igst_rate = split.igst_rate
        self.igst_amount = split.igst_amount
        self.tax_amount = split.tax_amount
        self.total_amount = split.total_amount
        self.recalculate_balance()

    def apply_cumulative_billing(self, billing: "CumulativeBilling") -> None:
        self.subtotal = billing.subtotal
        self.previously_billed_amount = billing.previously_billed_amount
        self.cumulative_fee_amount = billing.cumulative_fee_amount
        self.cumulative_fee_percentage = billing.cumulative_fee_percentage

    def recalculate_balance(self) -> None:
        self.balance_amount = quantize_money(
            to_decimal(self.total_amount) - to_decimal(self.paid_amount)
        )

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """Past due and neither paid nor cancelled"""
        today = today or date.today()
        return self.status not in SETTLED_STATUSES and self.due_date < today

    def effective_status(self, today: Optional[date] = None) -> InvoiceStatus:
        if self.is_overdue(today):
            return InvoiceStatus.OVERDUE
        return self.status
