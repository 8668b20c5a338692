"""Financial Statistics Repository Interface

Grouped invoice aggregates feeding the financial health dashboard.
"""

from abc import ABC, abstractmethod
from src.domain.financial_health import GroupedInvoiceStats


class FinancialStatsRepository(ABC):
    """
    Repository interface for dashboard aggregates

    Implementations scope the grouped rows and active_overall to projects in
    ACTIVE_PROJECT_STATUSES (invoices without a project included) and leave
    all_overall unfiltered.
    """

    @abstractmethod
    async def get_grouped_stats(self, organization_id: int) -> GroupedInvoiceStats:
        """
        Fetch all grouped invoice and project aggregates of an organization

        Args:
            organization_id: Organization ID

        Returns:
            GroupedInvoiceStats ready for compute_financial_health
        """
        pass
