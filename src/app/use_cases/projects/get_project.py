"""GetProject Use Case"""

from src.libs.result import Result, Return, Error
from src.app.repositories.project_repository import ProjectRepository
from .dtos import ProjectResponseDTO
from .views import FinancialVisibility, project_view


class GetProject:
    """
    Use Case: Get project

    Financial fields are only filled for callers with WITH_FINANCIALS.
    """

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def execute(
        self,
        project_id: int,
        visibility: FinancialVisibility = FinancialVisibility.WITHOUT_FINANCIALS,
    ) -> Result[ProjectResponseDTO]:
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

            return Return.ok(project_view(project, visibility))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_PROJECT_FAILED",
                    message="Failed to load project",
                    reason=str(e),
                )
            )
