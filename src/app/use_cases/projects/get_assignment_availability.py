"""GetAssignmentAvailability Use Case"""

from decimal import Decimal
from src.libs.result import Result, Return, Error
from src.app.repositories.project_repository import ProjectRepository
from src.domain.burn_rate import AssignmentCost, phase_budget_availability
from .dtos import AvailabilityResponseDTO


class GetAssignmentAvailability:
    """
    Use Case: How many more hours a phase budget covers

    remaining = contract_amount - booked cost; max hours are
    remaining / burn_rate rounded down, 0 for a non-positive rate.
    """

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def execute(self, phase_id: int, burn_rate: Decimal) -> Result[AvailabilityResponseDTO]:
        try:
            phase = await self.project_repo.get_phase_by_id(phase_id)
            if not phase:
                return Return.err(
                    Error(
                        code="PHASE_NOT_FOUND",
                        message=f"Phase {phase_id} not found",
                        reason="Phase does not exist",
                    )
                )

            assignments = await self.project_repo.get_assignments_by_phase(phase_id)
            availability = phase_budget_availability(
                phase.contract_amount,
                [AssignmentCost(hours=a.planned_hours, burn_rate=a.burn_rate) for a in assignments],
                burn_rate,
            )

            return Return.ok(AvailabilityResponseDTO.from_availability(phase.id, availability))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_AVAILABILITY_FAILED",
                    message="Failed to compute phase availability",
                    reason=str(e),
                )
            )
