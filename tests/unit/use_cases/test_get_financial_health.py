"""Unit tests for GetFinancialHealth use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.get_financial_health import GetFinancialHealth
from src.domain.financial_health import AggregateRow, GroupedInvoiceStats
from src.domain.invoice import InvoiceStatus
from src.domain.organization import Organization
from src.domain.project import ProjectChargeType


@pytest.fixture
def mock_organization_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=Organization(id=1, name="Acme"))
    return repo


@pytest.fixture
def mock_stats_repo():
    repo = MagicMock()
    repo.get_grouped_stats = AsyncMock(
        return_value=GroupedInvoiceStats(
            active_overall=AggregateRow(
                key=None, count=2, total_amount=Decimal("2000"),
                paid_amount=Decimal("500"), outstanding_amount=Decimal("1500"),
            ),
            all_overall=AggregateRow(
                key=None, count=3, total_amount=Decimal("3000"),
                paid_amount=Decimal("1500"), outstanding_amount=Decimal("1500"),
            ),
            by_status=[
                AggregateRow(key=InvoiceStatus.SENT, count=1, total_amount=Decimal("1500"),
                             outstanding_amount=Decimal("1500")),
                AggregateRow(key=InvoiceStatus.PAID, count=1, total_amount=Decimal("500"),
                             paid_amount=Decimal("500")),
            ],
            by_charge_type=[
                AggregateRow(key=ProjectChargeType.REGULAR, count=2, total_amount=Decimal("2000"),
                             paid_amount=Decimal("500"), outstanding_amount=Decimal("1500")),
            ],
            project_count_by_charge_type={ProjectChargeType.REGULAR: 1},
            active_project_count=1,
        )
    )
    return repo


@pytest.mark.asyncio
class TestGetFinancialHealth:
    async def test_dashboard(self, mock_organization_repo, mock_stats_repo):
        """
        Given: Grouped invoice rows of an organization
        When: Financial health is requested
        Then: Overall, all-invoices and breakdowns are returned with float rates
        """
        # Arrange
        use_case = GetFinancialHealth(organization_repo=mock_organization_repo, stats_repo=mock_stats_repo)

        # Act
        result = await use_case.execute(1)

        # Assert
        assert result.is_ok()
        health = result.value
        assert health.organization_id == 1
        assert health.overall.total_invoiced == Decimal("2000")
        assert health.overall.collection_rate == 25.0
        assert health.all_invoices.total_invoiced == Decimal("3000")
        assert health.all_invoices.collection_rate == 50.0
        assert health.overall.total_active_projects == 1
        assert [m.key for m in health.by_invoice_status] == ["SENT", "PAID"]
        assert health.by_charge_type[0].project_count == 1
        assert health.by_project_stage == []
        mock_stats_repo.get_grouped_stats.assert_called_once_with(1)

    async def test_organization_not_found(self, mock_organization_repo, mock_stats_repo):
        mock_organization_repo.get_by_id = AsyncMock(return_value=None)
        use_case = GetFinancialHealth(mock_organization_repo, mock_stats_repo)

        result = await use_case.execute(9)

        assert result.is_err()
        assert result.error.code == "ORGANIZATION_NOT_FOUND"
        mock_stats_repo.get_grouped_stats.assert_not_called()

    async def test_aggregation_failure(self, mock_organization_repo, mock_stats_repo):
        mock_stats_repo.get_grouped_stats = AsyncMock(side_effect=RuntimeError("timeout"))
        use_case = GetFinancialHealth(mock_organization_repo, mock_stats_repo)

        result = await use_case.execute(1)

        assert result.is_err()
        assert result.error.code == "GET_FINANCIAL_HEALTH_FAILED"
