"""GetFinancialHealth Use Case

Organization-wide invoicing dashboard.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.repositories.financial_stats_repository import FinancialStatsRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.domain.financial_health import compute_financial_health
from .dtos import FinancialHealthResponseDTO

logger = logging.getLogger(__name__)


class GetFinancialHealth:
    """
    Use Case: Get financial health of an organization

    Business Rules:
    1. Organization must exist
    2. Breakdowns and the overall view only count active projects
       (and invoices without a project)
    3. all_invoices covers every invoice regardless of project status
    4. collection_rate is 0 when nothing was invoiced
    """

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        stats_repo: FinancialStatsRepository,
    ):
        self.organization_repo = organization_repo
        self.stats_repo = stats_repo

    async def execute(self, organization_id: int) -> Result[FinancialHealthResponseDTO]:
        try:
            # Step 1: Verify organization
            organization = await self.organization_repo.get_by_id(organization_id)
            if not organization:
                return Return.err(
                    Error(
                        code="ORGANIZATION_NOT_FOUND",
                        message=f"Organization {organization_id} not found",
                        reason="Organization does not exist",
                    )
                )

            # Step 2: Aggregate
            stats = await self.stats_repo.get_grouped_stats(organization_id)
            snapshot = compute_financial_health(stats)

            logger.debug(
                f"Financial health for organization {organization_id}: "
                f"{snapshot.all_invoices_overall.total_invoices} invoices"
            )

            return Return.ok(FinancialHealthResponseDTO.from_snapshot(organization_id, snapshot))

        except Exception as e:
            logger.error(f"Financial health for organization {organization_id} failed: {e}")
            return Return.err(
                Error(
                    code="GET_FINANCIAL_HEALTH_FAILED",
                    message="Failed to compute financial health",
                    reason=str(e),
                )
            )
