"""GetProjectPhases Use Case"""

from typing import List
from src.libs.result import Result, Return, Error
from src.app.repositories.project_repository import ProjectRepository
from .dtos import PhaseResponseDTO
from .views import FinancialVisibility, phase_views


class GetProjectPhases:
    """
    Use Case: List the phases of a project with substages and completion

    contract_amount is only filled for callers with WITH_FINANCIALS.
    """

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def execute(
        self,
        project_id: int,
        visibility: FinancialVisibility = FinancialVisibility.WITHOUT_FINANCIALS,
    ) -> Result[List[PhaseResponseDTO]]:
        try:
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
            substages = await self.project_repo.get_substages([p.id for p in phases])

            return Return.ok(phase_views(phases, substages, visibility))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_PROJECT_PHASES_FAILED",
                    message="Failed to load project phases",
                    reason=str(e),
                )
            )
