"""Project API Routes

Project and phase views with role-based financial visibility, burn rate and
phase budget availability.
"""

from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.use_cases.projects.dtos import (
    AvailabilityResponseDTO,
    BurnRateResponseDTO,
    PhaseResponseDTO,
    ProjectResponseDTO,
)
from src.app.use_cases.projects.get_assignment_availability import GetAssignmentAvailability
from src.app.use_cases.projects.get_burn_rate import GetProjectBurnRate
from src.app.use_cases.projects.get_project import GetProject
from src.app.use_cases.projects.get_project_phases import GetProjectPhases
from src.app.use_cases.projects.views import FinancialVisibility
from src.adapter.repositories.project_repository import SqlAlchemyProjectRepository
from src.depends import get_session
from src.api.error import raise_for_error

router = APIRouter(prefix="/projects", tags=["Projects"])
phase_router = APIRouter(prefix="/phases", tags=["Projects"])


def get_visibility(
    x_view_financials: Optional[bool] = Header(default=None, alias="X-View-Financials"),
) -> FinancialVisibility:
    """Capability flag of the caller; absent means no financial fields"""
    return FinancialVisibility.from_flag(x_view_financials)


@router.get(
    "/{project_id}",
    response_model=ProjectResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_project(
    project_id: int,
    visibility: FinancialVisibility = Depends(get_visibility),
    session: AsyncSession = Depends(get_session)
):
    """
    Get a project.

    Fee, margin, budget and cost fields are null unless the caller sends
    `X-View-Financials: true`.
    """
    use_case = GetProject(SqlAlchemyProjectRepository(session))
    result = await use_case.execute(project_id, visibility)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{project_id}/phases",
    response_model=List[PhaseResponseDTO],
    status_code=status.HTTP_200_OK,
)
async def get_project_phases(
    project_id: int,
    visibility: FinancialVisibility = Depends(get_visibility),
    session: AsyncSession = Depends(get_session)
):
    """
    List project phases with substages and completion.

    contract_amount is null unless the caller sends `X-View-Financials: true`.
    """
    use_case = GetProjectPhases(SqlAlchemyProjectRepository(session))
    result = await use_case.execute(project_id, visibility)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{project_id}/burn-rate",
    response_model=BurnRateResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_project_burn_rate(
    project_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    Budget health of a project.

    **Example response:**
    ```json
    {
      "project_id": 7,
      "production_budget": "400000.00",
      "current_burn": "350000.00",
      "burn_percentage": "87.5000",
      "over_budget": false,
      "status": "warning",
      "phase_breakdown": [...]
    }
    ```
    """
    use_case = GetProjectBurnRate(
        SqlAlchemyProjectRepository(session),
        default_target_profit_margin=ApplicationConfig.DEFAULT_TARGET_PROFIT_MARGIN,
    )
    result = await use_case.execute(project_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@phase_router.get(
    "/{phase_id}/availability",
    response_model=AvailabilityResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_phase_availability(
    phase_id: int,
    burn_rate: Decimal = Query(..., description="Hourly cost rate of the candidate assignment"),
    session: AsyncSession = Depends(get_session)
):
    """Remaining phase budget and the hours it covers at `burn_rate`."""
    use_case = GetAssignmentAvailability(SqlAlchemyProjectRepository(session))
    result = await use_case.execute(phase_id, burn_rate)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
