"""Data Transfer Objects for Project Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.burn_rate import BurnRateSnapshot, PhaseAvailability, PhaseBurn
from src.domain.phase import CompletionStatus, PhaseSubstage


class ProjectResponseDTO(BaseModel):
    """
    Project as seen by the caller

    Financial fields are None when the caller cannot view financials.
    """

    project_id: int
    organization_id: int
    client_id: Optional[int] = None
    name: str
    charge_type: str
    stage: Optional[str] = None
    status: str
    total_fee: Optional[Decimal] = None
    target_profit_margin: Optional[Decimal] = None
    production_budget: Optional[Decimal] = None
    budget: Optional[Decimal] = None
    actual_cost: Optional[Decimal] = None
    created_at: datetime


class SubstageDTO(BaseModel):
    substage_id: int
    name: str
    sort_order: int
    completed: bool
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None

    @classmethod
    def from_entity(cls, substage: PhaseSubstage) -> "SubstageDTO":
        return cls(
            substage_id=substage.id,
            name=substage.name,
            sort_order=substage.sort_order,
            completed=substage.completed,
            completed_at=substage.completed_at,
            completed_by=substage.completed_by,
        )


class CompletionStatusDTO(BaseModel):
    total: int
    completed: int
    percentage: Decimal
    all_complete: bool

    @classmethod
    def from_status(cls, status: CompletionStatus) -> "CompletionStatusDTO":
        return cls(
            total=status.total,
            completed=status.completed,
            percentage=status.percentage,
            all_complete=status.all_complete,
        )


class PhaseResponseDTO(BaseModel):
    """Phase with its substages; contract_amount is a financial field"""

    phase_id: int
    project_id: int
    name: str
    sort_order: int
    archived: bool
    contract_amount: Optional[Decimal] = None
    substages: List[SubstageDTO] = Field(default_factory=list)
    completion: CompletionStatusDTO


class PhaseBurnDTO(BaseModel):
    phase_id: int
    phase_name: str
    phase_budget: Decimal
    phase_burn: Decimal
    burn_percentage: Decimal

    @classmethod
    def from_breakdown(cls, phase: PhaseBurn) -> "PhaseBurnDTO":
        return cls(
            phase_id=phase.phase_id,
            phase_name=phase.phase_name,
            phase_budget=phase.phase_budget,
            phase_burn=phase.phase_burn,
            burn_percentage=phase.burn_percentage,
        )


class BurnRateResponseDTO(BaseModel):
    """
    Budget health of a project

    status is one of healthy, warning, critical.
    """

    project_id: int
    project_name: str
    total_fee: Decimal
    target_profit_margin: Decimal
    production_budget: Decimal
    current_burn: Decimal
    burn_percentage: Decimal
    over_budget: bool
    status: str
    phase_breakdown: List[PhaseBurnDTO]

    @classmethod
    def from_snapshot(cls, project_id: int, project_name: str, snapshot: BurnRateSnapshot) -> "BurnRateResponseDTO":
        return cls(
            project_id=project_id,
            project_name=project_name,
            total_fee=snapshot.total_fee,
            target_profit_margin=snapshot.target_profit_margin,
            production_budget=snapshot.production_budget,
            current_burn=snapshot.current_burn,
            burn_percentage=snapshot.burn_percentage,
            over_budget=snapshot.over_budget,
            status=snapshot.status.value,
            phase_breakdown=[PhaseBurnDTO.from_breakdown(p) for p in snapshot.phase_breakdown],
        )


class AvailabilityResponseDTO(BaseModel):
    """Budget left on a phase and the hours it covers at the requested rate"""

    phase_id: int
    total_budget: Decimal
    current_burn: Decimal
    remaining_budget: Decimal
    burn_rate: Decimal
    max_hours_by_budget: int

    @classmethod
    def from_availability(cls, phase_id: int, availability: PhaseAvailability) -> "AvailabilityResponseDTO":
        return cls(
            phase_id=phase_id,
            total_budget=availability.total_budget,
            current_burn=availability.current_burn,
            remaining_budget=availability.remaining_budget,
            burn_rate=availability.burn_rate,
            max_hours_by_budget=availability.max_hours_by_budget,
        )
