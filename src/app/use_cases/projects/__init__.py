"""Project domain use cases"""
from .get_project import GetProject
from .get_project_phases import GetProjectPhases
from .get_burn_rate import GetProjectBurnRate
from .get_assignment_availability import GetAssignmentAvailability
from .views import FinancialVisibility, project_view, phase_view
from .dtos import (
    ProjectResponseDTO,
    PhaseResponseDTO,
    BurnRateResponseDTO,
    AvailabilityResponseDTO,
)

__all__ = [
    "GetProject",
    "GetProjectPhases",
    "GetProjectBurnRate",
    "GetAssignmentAvailability",
    "FinancialVisibility",
    "project_view",
    "phase_view",
    "ProjectResponseDTO",
    "PhaseResponseDTO",
    "BurnRateResponseDTO",
    "AvailabilityResponseDTO",
]
