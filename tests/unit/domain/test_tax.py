"""Unit tests for the GST tax split calculator

Tests cover:
- Intra-state CGST + SGST split
- Inter-state IGST
- Blank or unknown state falls back to IGST
- Rounding of each component
- Flat tax for invoices without a jurisdiction
- Project invoices never fall back to the flat tax
"""

from decimal import Decimal
import pytest
from src.domain.tax import (
    TaxJurisdiction,
    compute_flat_tax,
    compute_invoice_tax,
    compute_tax_split,
    is_intra_state,
)


class TestIsIntraState:
    def test_same_state_ignoring_case_and_whitespace(self):
        assert is_intra_state("Karnataka", "  karnataka ")

    def test_different_states(self):
        assert not is_intra_state("Karnataka", "Maharashtra")

    @pytest.mark.parametrize("org_state,client_state", [
        (None, "Karnataka"),
        ("Karnataka", None),
        ("", ""),
        ("   ", "   "),
        (None, None),
    ])
    def test_unknown_state_is_inter_state(self, org_state, client_state):
        assert not is_intra_state(org_state, client_state)


class TestComputeTaxSplit:
    def test_intra_state_splits_rate_in_half(self):
        """
        Given: Subtotal 100,000 at 18%, client in the organization's state
        When: Tax split is computed
        Then: CGST 9% = 9,000 and SGST 9% = 9,000, no IGST
        """
        # Act
        split = compute_tax_split(Decimal("100000"), "Karnataka", "KARNATAKA", Decimal("18"))

        # Assert
        assert split.jurisdiction == TaxJurisdiction.INTRA_STATE
        assert split.cgst_rate == Decimal("9")
        assert split.sgst_rate == Decimal("9")
        assert split.cgst_amount == Decimal("9000.00")
        assert split.sgst_amount == Decimal("9000.00")
        assert split.igst_rate == Decimal("0")
        assert split.igst_amount == Decimal("0")
        assert split.tax_amount == Decimal("18000.00")
        assert split.total_amount == Decimal("118000.00")

    def test_inter_state_uses_igst(self):
        """
        Given: Subtotal 100,000 at 18%, client in another state
        When: Tax split is computed
        Then: IGST 18% = 18,000, no CGST/SGST
        """
        split = compute_tax_split(Decimal("100000"), "Karnataka", "Maharashtra", Decimal("18"))

        assert split.jurisdiction == TaxJurisdiction.INTER_STATE
        assert split.igst_rate == Decimal("18")
        assert split.igst_amount == Decimal("18000.00")
        assert split.cgst_amount == Decimal("0")
        assert split.sgst_amount == Decimal("0")
        assert split.total_amount == Decimal("118000.00")

    def test_blank_client_state_falls_back_to_igst(self):
        split = compute_tax_split(Decimal("1000"), "Karnataka", "", Decimal("18"))

        assert split.jurisdiction == TaxJurisdiction.INTER_STATE
        assert split.igst_amount == Decimal("180.00")

    def test_each_half_is_rounded_separately(self):
        """
        Given: Subtotal 333.33 at 18% intra-state
        When: Tax split is computed
        Then: Each half is 333.33 * 9% = 29.9997 -> 30.00
        """
        split = compute_tax_split(Decimal("333.33"), "Goa", "Goa", Decimal("18"))

        assert split.cgst_amount == Decimal("30.00")
        assert split.sgst_amount == Decimal("30.00")
        assert split.tax_amount == Decimal("60.00")
        assert split.total_amount == Decimal("393.33")

    def test_exactly_one_component_pair_is_non_zero(self):
        intra = compute_tax_split(Decimal("500"), "Goa", "Goa", Decimal("12"))
        inter = compute_tax_split(Decimal("500"), "Goa", "Kerala", Decimal("12"))

        assert intra.igst_amount == 0 and intra.cgst_amount > 0 and intra.sgst_amount > 0
        assert inter.igst_amount > 0 and inter.cgst_amount == 0 and inter.sgst_amount == 0

    def test_total_equals_subtotal_plus_components(self):
        split = compute_tax_split(Decimal("12345.67"), "Goa", "Goa", Decimal("18"))

        assert split.total_amount == (
            split.subtotal + split.cgst_amount + split.sgst_amount + split.igst_amount
        )

    def test_zero_subtotal(self):
        split = compute_tax_split(Decimal("0"), "Goa", "Goa", Decimal("18"))

        assert split.tax_amount == Decimal("0.00")
        assert split.total_amount == Decimal("0.00")


class TestComputeFlatTax:
    def test_flat_rate_applied(self):
        split = compute_flat_tax(Decimal("1000"), Decimal("5"))

        assert split.jurisdiction == TaxJurisdiction.FLAT
        assert split.tax_amount == Decimal("50.00")
        assert split.total_amount == Decimal("1050.00")
        assert split.cgst_amount == split.sgst_amount == split.igst_amount == Decimal("0")

    def test_no_rate_means_no_tax(self):
        split = compute_flat_tax(Decimal("1000"), None)

        assert split.tax_amount == Decimal("0")
        assert split.total_amount == Decimal("1000.00")


class TestComputeInvoiceTax:
    def test_project_invoice_without_client_state_gets_igst(self):
        """
        Given: A project invoice whose client state is unknown
        When: Tax is computed with no explicit flat rate
        Then: IGST at the GST rate, not a zero flat tax
        """
        split = compute_invoice_tax(
            Decimal("10000"), "Karnataka", None, Decimal("18"), None, project_invoice=True
        )

        assert split.jurisdiction == TaxJurisdiction.INTER_STATE
        assert split.igst_amount == Decimal("1800.00")
        assert split.total_amount == Decimal("11800.00")

    def test_project_invoice_with_blank_client_state_gets_igst(self):
        split = compute_invoice_tax(
            Decimal("10000"), "Karnataka", "   ", Decimal("18"), None, project_invoice=True
        )

        assert split.igst_amount == Decimal("1800.00")

    def test_other_invoice_with_client_state_gets_gst_split(self):
        split = compute_invoice_tax(
            Decimal("1000"), "Goa", "goa", Decimal("18"), None, project_invoice=False
        )

        assert split.jurisdiction == TaxJurisdiction.INTRA_STATE
        assert split.cgst_amount == Decimal("90.00")

    def test_other_invoice_without_client_state_gets_flat_tax(self):
        split = compute_invoice_tax(
            Decimal("1000"), "Goa", None, Decimal("18"), Decimal("5"), project_invoice=False
        )

        assert split.jurisdiction == TaxJurisdiction.FLAT
        assert split.tax_amount == Decimal("50.00")
