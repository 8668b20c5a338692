"""GetProjectBurnRate Use Case

Budget health of a project from its resource assignments.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import DefaultDict, List
from src.libs.result import Result, Return, Error
from src.app.repositories.project_repository import ProjectRepository
from src.domain.burn_rate import AssignmentCost, BudgetHealth, PhaseBudget, compute_burn_rate
from src.domain.project import DEFAULT_TARGET_PROFIT_MARGIN
from .dtos import BurnRateResponseDTO

logger = logging.getLogger(__name__)


class GetProjectBurnRate:
    """
    Use Case: Get project burn rate

    Business Rules:
    1. production_budget = total_fee * (1 - target_profit_margin)
    2. current_burn = sum of planned_hours * burn_rate over all assignments
    3. status: critical > 100%, warning > 75%, else healthy
    4. Each phase is measured against its contract amount

    Flow:
    1. Load project, phases and assignments
    2. Group assignment costs by phase
    3. Evaluate burn
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        default_target_profit_margin: Decimal = DEFAULT_TARGET_PROFIT_MARGIN,
    ):
        self.project_repo = project_repo
        self.default_target_profit_margin = default_target_profit_margin

    async def execute(self, project_id: int) -> Result[BurnRateResponseDTO]:
        try:
            # Step 1: Load project data
            project = await self.project_repo.get_by_id(project_id)
            if not project:
                return Return.err(
                    Error(
                        code="PROJECT_NOT_FOUND",
                        message=f"Project {project_id} not found",
                        reason="Project does not exist",
                    )
                )

            phases = await self.project_repo.get_phases(project_id)
            assignments = await self.project_repo.get_assignments_by_project(project_id)

            # Step 2: Group costs by phase
            costs_by_phase: DefaultDict[int, List[AssignmentCost]] = defaultdict(list)
            for assignment in assignments:
                costs_by_phase[assignment.phase_id].append(
                    AssignmentCost(hours=assignment.planned_hours, burn_rate=assignment.burn_rate)
                )

            budgets = [
                PhaseBudget(
                    phase_id=phase.id,
                    phase_name=phase.name,
                    contract_amount=phase.contract_amount,
                    assignments=tuple(costs_by_phase.get(phase.id, ())),
                )
                for phase in phases
            ]

            # Step 3: Evaluate
            margin = project.target_profit_margin
            if margin is None:
                margin = self.default_target_profit_margin
            snapshot = compute_burn_rate(project.total_fee, margin, budgets)

            if snapshot.status != BudgetHealth.HEALTHY:
                logger.warning(
                    f"Project {project_id} burn at {snapshot.burn_percentage}% "
                    f"({snapshot.status.value})"
                )

            return Return.ok(BurnRateResponseDTO.from_snapshot(project.id, project.name, snapshot))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_BURN_RATE_FAILED",
                    message="Failed to compute burn rate",
                    reason=str(e),
                )
            )
