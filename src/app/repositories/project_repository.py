"""Project Repository Interface

Read access to projects, their phases, substages and resource assignments.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from src.domain.phase import Phase, PhaseSubstage, ResourceAssignment
from src.domain.project import Project


class ProjectRepository(ABC):
    """
    Repository interface for Project data

    Provides the rows the burn-rate evaluator and the visibility
    projections work from.
    """

    @abstractmethod
    async def get_by_id(self, project_id: int) -> Optional[Project]:
        """
        Retrieve project by ID

        Args:
            project_id: Project ID

        Returns:
            Project if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_phases(self, project_id: int) -> List[Phase]:
        """
        Retrieve the phases of a project ordered by sort_order

        Args:
            project_id: Project ID

        Returns:
            List of phases (empty if none)
        """
        pass

    @abstractmethod
    async def get_phase_by_id(self, phase_id: int) -> Optional[Phase]:
        pass

    @abstractmethod
    async def get_substages(self, phase_ids: List[int]) -> Dict[int, List[PhaseSubstage]]:
        """
        Retrieve substages grouped by phase ID

        Args:
            phase_ids: Phases to load substages for

        Returns:
            Mapping phase_id -> ordered substages; phases without substages are absent
        """
        pass

    @abstractmethod
    async def get_assignments_by_project(self, project_id: int) -> List[ResourceAssignment]:
        """
        Retrieve all resource assignments across the phases of a project

        Args:
            project_id: Project ID

        Returns:
            List of assignments
        """
        pass

    @abstractmethod
    async def get_assignments_by_phase(self, phase_id: int) -> List[ResourceAssignment]:
        pass
