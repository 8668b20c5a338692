"""Financial Health API Routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.billing.dtos import FinancialHealthResponseDTO
from src.app.use_cases.billing.get_financial_health import GetFinancialHealth
from src.adapter.repositories.financial_stats_repository import SqlAlchemyFinancialStatsRepository
from src.adapter.repositories.organization_repository import SqlAlchemyOrganizationRepository
from src.depends import get_session
from src.api.error import raise_for_error

router = APIRouter(prefix="/financial-health", tags=["Financial Health"])


@router.get(
    "",
    response_model=FinancialHealthResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Organization not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ORGANIZATION_NOT_FOUND",
                            "message": "Organization 1 not found"
                        }
                    }
                }
            }
        }
    }
)
async def get_financial_health(
    organization_id: int = Query(..., gt=0),
    session: AsyncSession = Depends(get_session)
):
    """
    Organization financial dashboard.

    `overall` covers invoices of active projects (and invoices without a
    project); `all_invoices` covers every invoice. Breakdowns by charge type,
    project stage and invoice status are active-scoped.
    """
    use_case = GetFinancialHealth(
        SqlAlchemyOrganizationRepository(session),
        SqlAlchemyFinancialStatsRepository(session),
    )
    result = await use_case.execute(organization_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
