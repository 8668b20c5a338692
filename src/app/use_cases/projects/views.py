"""Role-based field visibility

Projects and phases carry financial fields that only some callers may see.
The caller's capability is passed explicitly and the projection picks which
fields to fill; hidden fields are returned as None.
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence
from src.domain.phase import CompletionStatus, Phase, PhaseSubstage
from src.domain.project import Project
from .dtos import CompletionStatusDTO, PhaseResponseDTO, ProjectResponseDTO, SubstageDTO


class FinancialVisibility(str, Enum):
    """Capability of the caller regarding financial fields"""
    WITH_FINANCIALS = "with_financials"
    WITHOUT_FINANCIALS = "without_financials"

    @classmethod
    def from_flag(cls, view_financials: Optional[bool]) -> "FinancialVisibility":
        return cls.WITH_FINANCIALS if view_financials else cls.WITHOUT_FINANCIALS

    @property
    def shows_financials(self) -> bool:
        return self is FinancialVisibility.WITH_FINANCIALS


def project_view(project: Project, visibility: FinancialVisibility) -> ProjectResponseDTO:
    """Project projection; total_fee, margin, budgets and cost need financials"""
    financial: Dict[str, object] = {}
    if visibility.shows_financials:
        financial = {
            "total_fee": project.total_fee,
            "target_profit_margin": project.target_profit_margin,
            "production_budget": project.production_budget,
            "budget": project.budget,
            "actual_cost": project.actual_cost,
        }

    return ProjectResponseDTO(
        project_id=project.id,
        organization_id=project.organization_id,
        client_id=project.client_id,
        name=project.name,
        charge_type=project.charge_type.value,
        stage=project.stage.value if project.stage else None,
        status=project.status.value,
        created_at=project.created_at,
        **financial,
    )


def phase_view(
    phase: Phase,
    substages: Sequence[PhaseSubstage],
    visibility: FinancialVisibility,
) -> PhaseResponseDTO:
    """Phase projection; contract_amount needs financials"""
    ordered = sorted(substages, key=lambda s: (s.sort_order, s.id or 0))
    return PhaseResponseDTO(
        phase_id=phase.id,
        project_id=phase.project_id,
        name=phase.name,
        sort_order=phase.sort_order,
        archived=phase.archived,
        contract_amount=phase.contract_amount if visibility.shows_financials else None,
        substages=[SubstageDTO.from_entity(s) for s in ordered],
        completion=CompletionStatusDTO.from_status(CompletionStatus.from_substages(ordered)),
    )


def phase_views(
    phases: Sequence[Phase],
    substages_by_phase: Dict[int, List[PhaseSubstage]],
    visibility: FinancialVisibility,
) -> List[PhaseResponseDTO]:
    return [phase_view(p, substages_by_phase.get(p.id, []), visibility) for p in phases]
