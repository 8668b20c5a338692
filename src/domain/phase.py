"""Phase, Substage and Resource Assignment Domain Entities

A phase belongs to one project and has a contract amount that acts as its
budget. Resource assignments book hours against a phase at a burn rate.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdType
from src.domain.money import to_decimal


class Phase(BaseModel, table=True):
    """
    Phase - Contracted slice of a project

    Domain Rules:
    - Belongs to exactly one project
    - contract_amount is a financial field, hidden from non-financial views
    """

    __tablename__ = "phases"
    __table_args__ = (
        Index('ix_phases_project_id', 'project_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique phase identifier (auto-increment)"
    )

    project_id: int = Field(
        foreign_key="projects.id",
        description="Owning project"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Phase name"
    )

    sort_order: int = Field(default=0, description="Display order within the project")

    contract_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(15, 2), nullable=True),
        description="Contracted amount (phase budget)"
    )

    archived: bool = Field(default=False, description="Archived phases are read-only")

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Phase creation timestamp"
    )


class PhaseSubstage(BaseModel, table=True):
    """PhaseSubstage - Checklist item of a phase"""

    __tablename__ = "phase_substages"
    __table_args__ = (
        Index('ix_phase_substages_phase_id', 'phase_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    phase_id: int = Field(foreign_key="phases.id")

    name: str = Field(sa_column=Column(String(255), nullable=False))

    sort_order: int = Field(default=0)

    completed: bool = Field(default=False)

    completed_at: Optional[datetime] = Field(default=None)

    completed_by: Optional[str] = Field(default=None)


class ResourceAssignment(BaseModel, table=True):
    """
    ResourceAssignment - User booked on a phase

    Contributes planned_hours * burn_rate to the phase and project burn.
    """

    __tablename__ = "resource_assignments"
    __table_args__ = (
        Index('ix_resource_assignments_phase_id', 'phase_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    phase_id: int = Field(foreign_key="phases.id")

    user_id: int = Field(description="Assigned user")

    role_on_phase: Optional[str] = Field(
        default=None,
        description="Role on the phase (e.g., Senior Architect)"
    )

    planned_hours: Optional[int] = Field(default=None, description="Budgeted hours")

    burn_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(12, 2), nullable=True),
        description="Cost per hour including overhead"
    )

    @property
    def cost(self) -> Decimal:
        return to_decimal(self.planned_hours) * to_decimal(self.burn_rate)


@dataclass(frozen=True)
class CompletionStatus:
    """Completion summary of a phase's substages"""

    total: int
    completed: int
    percentage: Decimal
    all_complete: bool

    @classmethod
    def from_substages(cls, substages: Sequence[PhaseSubstage]) -> "CompletionStatus":
        total = len(substages)
        completed = sum(1 for substage in substages if substage.completed)
        if total:
            pct = (Decimal(completed) * 100 / Decimal(total)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        else:
            pct = Decimal("0")
        return cls(
            total=total,
            completed=completed,
            percentage=pct,
            all_complete=total > 0 and completed == total,
        )
