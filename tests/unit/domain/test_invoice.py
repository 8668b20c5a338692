"""Unit tests for Invoice and Phase domain entities"""

from datetime import date
from decimal import Decimal
import pytest
from src.domain.cumulative_billing import compute_cumulative_billing
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.phase import CompletionStatus, PhaseSubstage
from src.domain.project import Project, ProjectStatus
from src.domain.tax import compute_tax_split


def _invoice(**overrides) -> Invoice:
    data = {
        "organization_id": 1,
        "invoice_number": "ACME-2024-001",
        "issue_date": date(2024, 3, 1),
        "due_date": date(2024, 3, 31),
    }
    data.update(overrides)
    return Invoice(**data)


class TestInvoiceOverdue:
    def test_sent_invoice_past_due_is_overdue(self):
        invoice = _invoice(status=InvoiceStatus.SENT)

        assert invoice.is_overdue(date(2024, 4, 1)) is True
        assert invoice.effective_status(date(2024, 4, 1)) == InvoiceStatus.OVERDUE

    def test_due_today_is_not_overdue(self):
        invoice = _invoice(status=InvoiceStatus.SENT)

        assert invoice.is_overdue(date(2024, 3, 31)) is False
        assert invoice.effective_status(date(2024, 3, 31)) == InvoiceStatus.SENT

    @pytest.mark.parametrize("status", [InvoiceStatus.PAID, InvoiceStatus.CANCELLED])
    def test_settled_invoice_is_never_overdue(self, status):
        invoice = _invoice(status=status)

        assert invoice.is_overdue(date(2030, 1, 1)) is False
        assert invoice.effective_status(date(2030, 1, 1)) == status

    def test_draft_past_due_is_overdue(self):
        invoice = _invoice(status=InvoiceStatus.DRAFT)

        assert invoice.effective_status(date(2024, 5, 1)) == InvoiceStatus.OVERDUE


class TestInvoiceAmounts:
    def test_apply_tax_split_sets_totals_and_balance(self):
        """
        Given: A draft invoice with 10,000 already paid
        When: An intra-state split of 100,000 at 18% is applied
        Then: Total 118,000 and balance 108,000
        """
        # Arrange
        invoice = _invoice(paid_amount=Decimal("10000"))
        split = compute_tax_split(Decimal("100000"), "Goa", "goa", Decimal("18"))

        # Act
        invoice.apply_tax_split(split)

        # Assert
        assert invoice.subtotal == Decimal("100000.00")
        assert invoice.cgst_amount == Decimal("9000.00")
        assert invoice.sgst_amount == Decimal("9000.00")
        assert invoice.igst_amount == Decimal("0")
        assert invoice.tax_amount == Decimal("18000.00")
        assert invoice.total_amount == Decimal("118000.00")
        assert invoice.balance_amount == Decimal("108000.00")

    def test_apply_cumulative_billing(self):
        invoice = _invoice(project_id=7)
        billing = compute_cumulative_billing(Decimal("1000000"), Decimal("0.45"), Decimal("200000"))

        invoice.apply_cumulative_billing(billing)

        assert invoice.subtotal == Decimal("250000.00")
        assert invoice.previously_billed_amount == Decimal("200000.00")
        assert invoice.cumulative_fee_amount == Decimal("450000.00")
        assert invoice.cumulative_fee_percentage == Decimal("45.00")

    def test_recalculate_balance_after_payment(self):
        invoice = _invoice(total_amount=Decimal("1180.00"))

        invoice.paid_amount = Decimal("1180.00")
        invoice.recalculate_balance()

        assert invoice.balance_amount == Decimal("0.00")


class TestProject:
    @pytest.mark.parametrize("status,active", [
        (ProjectStatus.ACTIVE, True),
        (ProjectStatus.PROGRESS, True),
        (ProjectStatus.ON_HOLD, False),
        (ProjectStatus.COMPLETED, False),
    ])
    def test_is_active(self, status, active):
        project = Project(organization_id=1, name="Villa", status=status)

        assert project.is_active is active

    def test_production_budget(self):
        project = Project(
            organization_id=1, name="Villa",
            total_fee=Decimal("500000"), target_profit_margin=Decimal("0.25"),
        )

        assert project.production_budget == Decimal("375000")


class TestCompletionStatus:
    def test_partial_completion(self):
        substages = [
            PhaseSubstage(phase_id=1, name="Survey", completed=True),
            PhaseSubstage(phase_id=1, name="Brief", completed=False),
            PhaseSubstage(phase_id=1, name="Sketch", completed=False),
        ]

        status = CompletionStatus.from_substages(substages)

        assert status.total == 3
        assert status.completed == 1
        assert status.percentage == Decimal("33.33")
        assert status.all_complete is False

    def test_all_complete(self):
        substages = [PhaseSubstage(phase_id=1, name="Survey", completed=True)]

        status = CompletionStatus.from_substages(substages)

        assert status.percentage == Decimal("100.00")
        assert status.all_complete is True

    def test_no_substages_is_not_complete(self):
        status = CompletionStatus.from_substages([])

        assert status.total == 0
        assert status.percentage == Decimal("0")
        assert status.all_complete is False
