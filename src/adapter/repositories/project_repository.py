"""SQLAlchemy Project Repository Implementation

Reads projects, phases, substages and resource assignments.
"""

from collections import defaultdict
from typing import Dict, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.project_repository import ProjectRepository
from src.domain.phase import Phase, PhaseSubstage, ResourceAssignment
from src.domain.project import Project


class SqlAlchemyProjectRepository(ProjectRepository):
    """SQLAlchemy implementation of ProjectRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, project_id: int) -> Optional[Project]:
        statement = select(Project).where(Project.id == project_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_phases(self, project_id: int) -> List[Phase]:
        statement = (
            select(Phase)
            .where(Phase.project_id == project_id)
            .order_by(Phase.sort_order, Phase.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_phase_by_id(self, phase_id: int) -> Optional[Phase]:
        statement = select(Phase).where(Phase.id == phase_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_substages(self, phase_ids: List[int]) -> Dict[int, List[PhaseSubstage]]:
        """
        Retrieve substages grouped by phase ID

        A single query for all phases; each list keeps sort_order.
        """
        if not phase_ids:
            return {}

        statement = (
            select(PhaseSubstage)
            .where(PhaseSubstage.phase_id.in_(phase_ids))
            .order_by(PhaseSubstage.phase_id, PhaseSubstage.sort_order, PhaseSubstage.id)
        )
        result = await self.session.execute(statement)

        grouped: Dict[int, List[PhaseSubstage]] = defaultdict(list)
        for substage in result.scalars().all():
            grouped[substage.phase_id].append(substage)
        return dict(grouped)

    async def get_assignments_by_project(self, project_id: int) -> List[ResourceAssignment]:
        statement = (
            select(ResourceAssignment)
            .join(Phase, ResourceAssignment.phase_id == Phase.id)
            .where(Phase.project_id == project_id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_assignments_by_phase(self, phase_id: int) -> List[ResourceAssignment]:
        statement = select(ResourceAssignment).where(ResourceAssignment.phase_id == phase_id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())
