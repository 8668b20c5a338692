"""Invoice Line Domain Entity

Line items of an invoice. Invoices that are not billed against a project fee
take their subtotal from the sum of their lines.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType
from src.domain.money import ZERO, Number, quantize_money, to_decimal


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - Individual line item within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - total_price = quantity * unit_price, rounded to cents
    - Lines are only replaced while the invoice is a DRAFT
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice line identifier (auto-increment)"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Site supervision visits')"
    )

    item_type: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Free-form category (e.g., SERVICE, EXPENSE)"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (e.g., hours, visits, units)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Price per unit (precision: 18,6)"
    )

    total_price: Decimal = Field(
        default=ZERO,
        sa_column=Column(Numeric(15, 2), nullable=False),
        description="Total price (quantity * unit_price)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Line item creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1,
                "description": "Site supervision visits",
                "item_type": "SERVICE",
                "quantity": "4.000000",
                "unit_price": "7500.000000",
                "total_price": "30000.00",
                "created_at": "2024-03-01T00:00:00Z"
            }
        }


def line_total(quantity: Number, unit_price: Number) -> Decimal:
    return quantize_money(to_decimal(quantity) * to_decimal(unit_price))


def lines_subtotal(lines: Iterable[InvoiceLine]) -> Decimal:
    """Sum of line totals; zero for no lines"""
    return quantize_money(sum((to_decimal(line.total_price) for line in lines), ZERO))
