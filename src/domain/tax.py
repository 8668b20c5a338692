"""GST Tax Split Calculator

Splits an invoice subtotal into CGST + SGST (client in the organization's
state) or IGST (any other state). Rates are percentages: 18 means 18%.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional
from src.domain.money import ZERO, HUNDRED, Number, quantize_money, to_decimal


class TaxJurisdiction(str, Enum):
    """Which tax treatment was applied"""
    INTRA_STATE = "intra_state"
    INTER_STATE = "inter_state"
    FLAT = "flat"


@dataclass(frozen=True)
class TaxSplit:
    """
    Result of a tax computation

    Exactly one of (cgst + sgst) or igst is non-zero for GST splits; a flat
    split only carries tax_rate / tax_amount.
    """

    jurisdiction: TaxJurisdiction
    subtotal: Decimal
    tax_rate: Decimal
    cgst_rate: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_rate: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_rate: Decimal = ZERO
    igst_amount: Decimal = ZERO
    tax_amount: Decimal = ZERO

    @property
    def total_amount(self) -> Decimal:
        return self.subtotal + self.tax_amount


def _normalize_state(state: Optional[str]) -> Optional[str]:
    if state is None:
        return None
    state = state.strip().lower()
    return state or None


def is_intra_state(organization_state: Optional[str], client_state: Optional[str]) -> bool:
    """
    True when both states are known and equal (trimmed, case-insensitive)

    An unknown state on either side is treated as inter-state.
    """
    org = _normalize_state(organization_state)
    client = _normalize_state(client_state)
    return org is not None and org == client


def compute_tax_split(
    subtotal: Number,
    organization_state: Optional[str],
    client_state: Optional[str],
    tax_rate: Number,
) -> TaxSplit:
    """
    Split subtotal into GST components

    Args:
        subtotal: Taxable value
        organization_state: State of the issuing organization
        client_state: State of the client
        tax_rate: Statutory GST rate in percent (e.g., 18)

    Returns:
        TaxSplit with CGST/SGST at half the rate each, or IGST at the full rate
    """
    subtotal = quantize_money(subtotal)
    rate = to_decimal(tax_rate)

    if is_intra_state(organization_state, client_state):
        half_rate = rate / 2
        half_amount = quantize_money(subtotal * half_rate / HUNDRED)
        return TaxSplit(
            jurisdiction=TaxJurisdiction.INTRA_STATE,
            subtotal=subtotal,
            tax_rate=rate,
            cgst_rate=half_rate,
            cgst_amount=half_amount,
            sgst_rate=half_rate,
            sgst_amount=half_amount,
            tax_amount=half_amount + half_amount,
        )

    igst_amount = quantize_money(subtotal * rate / HUNDRED)
    return TaxSplit(
        jurisdiction=TaxJurisdiction.INTER_STATE,
        subtotal=subtotal,
        tax_rate=rate,
        igst_rate=rate,
        igst_amount=igst_amount,
        tax_amount=igst_amount,
    )


def compute_flat_tax(subtotal: Number, tax_rate: Optional[Number]) -> TaxSplit:
    """Single-rate tax for invoices without a GST jurisdiction"""
    subtotal = quantize_money(subtotal)
    rate = to_decimal(tax_rate)
    tax_amount = quantize_money(subtotal * rate / HUNDRED) if rate > ZERO else ZERO
    return TaxSplit(
        jurisdiction=TaxJurisdiction.FLAT,
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
    )


def compute_invoice_tax(
    subtotal: Number,
    organization_state: Optional[str],
    client_state: Optional[str],
    gst_rate: Number,
    flat_rate: Optional[Number],
    project_invoice: bool,
) -> TaxSplit:
    """
    Tax of an invoice

    Project invoices always get a GST split, so a blank or unknown client
    state still yields IGST. Other invoices get a GST split when the client
    state is known and a flat tax at flat_rate otherwise.
    """
    if project_invoice or _normalize_state(client_state) is not None:
        return compute_tax_split(subtotal, organization_state, client_state, gst_rate)
    return compute_flat_tax(subtotal, flat_rate)
