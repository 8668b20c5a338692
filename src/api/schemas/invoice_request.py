"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class InvoiceLineRequestSchema(BaseModel):
    """Line item of an invoice"""

    description: str = Field(..., min_length=1, max_length=255)
    item_type: Optional[str] = Field(default=None, max_length=50)
    quantity: Decimal = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    organization_id: int = Field(..., gt=0, description="Issuing organization")

    project_id: Optional[int] = Field(
        default=None,
        gt=0,
        description="Project being billed (optional)"
    )

    target_cumulative_percentage: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Cumulative share of the fee billed after this invoice: "
                    "a fraction (0.40 = 40%) or, above 1, a percentage (40 = 40%)"
    )

    subtotal: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Explicit subtotal for invoices without a project fee"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate in percent (defaults to the configured GST rate)"
    )

    client_name: Optional[str] = Field(default=None, max_length=255)
    client_email: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[str] = Field(default=None)
    client_state: Optional[str] = Field(default=None, max_length=100)
    issue_date: Optional[date] = Field(default=None)
    due_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    lines: List[InvoiceLineRequestSchema] = Field(
        default_factory=list,
        description="Line items; their sum is the subtotal of invoices without a project fee"
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


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for editing a draft invoice

    Used for PUT /invoices/{invoice_id} endpoint. Omitted fields keep their value.
    """

    organization_id: int = Field(..., gt=0)

    client_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    client_email: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[str] = Field(default=None)
    client_state: Optional[str] = Field(default=None, max_length=100)
    issue_date: Optional[date] = Field(default=None)
    due_date: Optional[date] = Field(default=None)

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate in percent"
    )

    notes: Optional[str] = Field(default=None)

    lines: Optional[List[InvoiceLineRequestSchema]] = Field(
        default=None,
        description="Replaces all line items when given"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "organization_id": 1,
                "client_state": "Maharashtra",
                "lines": [
                    {"description": "Site supervision visits", "quantity": "4", "unit_price": "7500"}
                ],
            }
        }


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /invoices/{invoice_id}/payments endpoint.
    """

    organization_id: int = Field(..., gt=0)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Payment amount (must equal the invoice total)"
    )

    payment_date: Optional[date] = Field(default=None, description="Defaults to today")


class UpdateInvoiceStatusRequestSchema(BaseModel):
    """Used for PATCH /invoices/{invoice_id}/status endpoint."""

    organization_id: int = Field(..., gt=0)

    status: str = Field(
        ...,
        min_length=1,
        description="Target status: DRAFT, SENT or CANCELLED"
    )
