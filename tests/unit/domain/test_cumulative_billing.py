"""Unit tests for the cumulative billing tracker

Tests cover:
- Sequential progress invoices on one project
- Billing below the already billed amount is rejected
- Billing above the total fee is rejected
- Targets above 1 are read as percentages
- Cancelled invoices do not count as billed
- Stage schedule lookup
"""

from datetime import date
from decimal import Decimal
import pytest
from src.domain.cumulative_billing import (
    compute_cumulative_billing,
    cumulative_percentage_for_stage,
    previously_billed_amount,
)
from src.domain.errors import FeeExceededError, InvalidBillingStateError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.project import ProjectStage

TOTAL_FEE = Decimal("1000000")


def _invoice(subtotal: str, status: InvoiceStatus = InvoiceStatus.SENT) -> Invoice:
    return Invoice(
        organization_id=1,
        project_id=1,
        invoice_number="X",
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 31),
        status=status,
        subtotal=Decimal(subtotal),
    )


class TestComputeCumulativeBilling:
    def test_first_invoice_bills_target_share(self):
        """
        Given: Total fee 1,000,000 and nothing billed
        When: Billing up to 20%
        Then: Subtotal is 200,000
        """
        billing = compute_cumulative_billing(TOTAL_FEE, Decimal("0.20"), Decimal("0"))

        assert billing.subtotal == Decimal("200000.00")
        assert billing.cumulative_fee_amount == Decimal("200000.00")
        assert billing.cumulative_fee_percentage == Decimal("20.00")
        assert billing.previously_billed_amount == Decimal("0.00")

    def test_sequential_invoices_bill_the_difference(self):
        """
        Given: Total fee 1,000,000
        When: Invoices target 20%, 45%, 70% in order
        Then: Subtotals are 200,000, 250,000, 250,000
        """
        billed = Decimal("0")
        subtotals = []
        for target in ("0.20", "0.45", "0.70"):
            billing = compute_cumulative_billing(TOTAL_FEE, Decimal(target), billed)
            subtotals.append(billing.subtotal)
            billed += billing.subtotal

        assert subtotals == [Decimal("200000.00"), Decimal("250000.00"), Decimal("250000.00")]
        assert billed == Decimal("700000.00")

    def test_cumulative_amount_equals_previous_plus_subtotal(self):
        billing = compute_cumulative_billing(TOTAL_FEE, Decimal("0.45"), Decimal("200000"))

        assert billing.cumulative_fee_amount == billing.previously_billed_amount + billing.subtotal

    def test_target_below_billed_amount_is_rejected(self):
        """
        Given: 700,000 already billed
        When: A new invoice targets 10%
        Then: InvalidBillingStateError, not a clamped or negative subtotal
        """
        with pytest.raises(InvalidBillingStateError) as exc_info:
            compute_cumulative_billing(TOTAL_FEE, Decimal("0.10"), Decimal("700000"))

        assert exc_info.value.code == "INVALID_BILLING_STATE"
        assert exc_info.value.cumulative_fee_amount == Decimal("100000.00")
        assert exc_info.value.previously_billed == Decimal("700000.00")

    def test_target_equal_to_billed_amount_gives_zero_subtotal(self):
        billing = compute_cumulative_billing(TOTAL_FEE, Decimal("0.70"), Decimal("700000"))

        assert billing.subtotal == Decimal("0.00")

    def test_target_above_total_fee_is_rejected(self):
        with pytest.raises(FeeExceededError) as exc_info:
            compute_cumulative_billing(TOTAL_FEE, Decimal("110"), Decimal("0"))

        assert exc_info.value.code == "FEE_EXCEEDED"
        assert exc_info.value.total_fee == TOTAL_FEE

    def test_full_fee_is_allowed(self):
        billing = compute_cumulative_billing(TOTAL_FEE, Decimal("1"), Decimal("900000"))

        assert billing.subtotal == Decimal("100000.00")
        assert billing.cumulative_fee_percentage == Decimal("100.00")

    def test_percentage_above_one_is_normalized(self):
        """
        Given: Total fee 1,000,000
        When: The target is given as 40 instead of 0.40
        Then: It is read as 40% and bills 400,000
        """
        billing = compute_cumulative_billing(TOTAL_FEE, Decimal("40"), Decimal("0"))

        assert billing.subtotal == Decimal("400000.00")
        assert billing.cumulative_fee_percentage == Decimal("40.00")

    def test_fraction_and_percentage_forms_agree(self):
        as_fraction = compute_cumulative_billing(TOTAL_FEE, Decimal("0.45"), Decimal("200000"))
        as_percentage = compute_cumulative_billing(TOTAL_FEE, Decimal("45"), Decimal("200000"))

        assert as_fraction == as_percentage

    def test_amounts_are_rounded_to_cents(self):
        billing = compute_cumulative_billing(Decimal("333333.33"), Decimal("0.333"), Decimal("0"))

        # 333333.33 * 0.333 = 110999.998... -> 111000.00
        assert billing.cumulative_fee_amount == Decimal("111000.00")
        assert billing.cumulative_fee_percentage == Decimal("33.30")


class TestPreviouslyBilledAmount:
    def test_sums_subtotals(self):
        invoices = [_invoice("200000"), _invoice("250000", InvoiceStatus.PAID)]

        assert previously_billed_amount(invoices) == Decimal("450000")

    def test_cancelled_invoices_are_ignored(self):
        invoices = [_invoice("200000"), _invoice("250000", InvoiceStatus.CANCELLED)]

        assert previously_billed_amount(invoices) == Decimal("200000")

    def test_no_invoices(self):
        assert previously_billed_amount([]) == Decimal("0")


class TestStageSchedule:
    @pytest.mark.parametrize("stage,expected", [
        (ProjectStage.CONCEPT, Decimal("10")),
        (ProjectStage.PRELIM, Decimal("25")),
        (ProjectStage.STATUTORY, Decimal("35")),
        (ProjectStage.TENDER, Decimal("60")),
        (ProjectStage.CONTRACT, Decimal("65")),
        (ProjectStage.CONSTRUCTION, Decimal("90")),
        (ProjectStage.COMPLETION, Decimal("100")),
    ])
    def test_cumulative_percentage_for_stage(self, stage, expected):
        assert cumulative_percentage_for_stage(stage) == expected

    def test_no_stage(self):
        assert cumulative_percentage_for_stage(None) is None

    def test_schedule_is_monotonic(self):
        values = [cumulative_percentage_for_stage(stage) for stage in ProjectStage]
        assert values == sorted(values)
