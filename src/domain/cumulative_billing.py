"""Cumulative Billing Tracker

Percentage-of-fee progress billing: each invoice states how much of the total
fee should have been billed once it is issued, and bills the difference to
what earlier invoices already covered.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional
from src.domain.errors import FeeExceededError, InvalidBillingStateError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import ZERO, HUNDRED, Number, quantize_money, to_decimal
from src.domain.project import ProjectStage

# Cumulative share of the fee due at the end of each stage (COA India scale)
CUMULATIVE_STAGE_SCHEDULE = {
    ProjectStage.CONCEPT: Decimal("10"),
    ProjectStage.PRELIM: Decimal("25"),
    ProjectStage.STATUTORY: Decimal("35"),
    ProjectStage.TENDER: Decimal("60"),
    ProjectStage.CONTRACT: Decimal("65"),
    ProjectStage.CONSTRUCTION: Decimal("90"),
    ProjectStage.COMPLETION: Decimal("100"),
}


@dataclass(frozen=True)
class CumulativeBilling:
    """Amounts fixed on an invoice at creation time"""

    subtotal: Decimal
    cumulative_fee_amount: Decimal
    cumulative_fee_percentage: Decimal
    previously_billed_amount: Decimal


def cumulative_percentage_for_stage(stage: Optional[ProjectStage]) -> Optional[Decimal]:
    """Cumulative fee percentage (0-100) scheduled for a stage"""
    if stage is None:
        return None
    return CUMULATIVE_STAGE_SCHEDULE.get(ProjectStage(stage))


def normalize_target_percentage(target_percentage: Number) -> Decimal:
    """Fraction of the fee; values above 1 are percentages and divided by 100"""
    target = to_decimal(target_percentage)
    if target > 1:
        return target / HUNDRED
    return target


def previously_billed_amount(invoices: Iterable[Invoice]) -> Decimal:
    """Sum of subtotals of prior invoices, ignoring cancelled ones"""
    return sum(
        (to_decimal(invoice.subtotal) for invoice in invoices
         if invoice.status != InvoiceStatus.CANCELLED),
        ZERO,
    )


def compute_cumulative_billing(
    total_fee: Number,
    target_percentage: Number,
    previously_billed: Number,
) -> CumulativeBilling:
    """
    Incremental amount due on a new progress invoice

    Args:
        total_fee: Project total fee
        target_percentage: Cumulative share of the fee billed after this
            invoice, as a fraction (0.40 = 40%) or, above 1, a percentage (40 = 40%)
        previously_billed: Subtotals of prior non-cancelled invoices

    Returns:
        CumulativeBilling with subtotal = cumulative amount - previously billed

    Raises:
        FeeExceededError: cumulative amount would exceed total_fee
        InvalidBillingStateError: cumulative amount is below the billed amount
    """
    total_fee = to_decimal(total_fee)
    target = normalize_target_percentage(target_percentage)
    previously_billed = quantize_money(previously_billed)

    cumulative_fee_amount = quantize_money(total_fee * target)

    if cumulative_fee_amount > total_fee:
        raise FeeExceededError(cumulative_fee_amount, total_fee)

    subtotal = cumulative_fee_amount - previously_billed
    if subtotal < ZERO:
        raise InvalidBillingStateError(cumulative_fee_amount, previously_billed)

    return CumulativeBilling(
        subtotal=subtotal,
        cumulative_fee_amount=cumulative_fee_amount,
        cumulative_fee_percentage=quantize_money(target * HUNDRED),
        previously_billed_amount=previously_billed,
    )
