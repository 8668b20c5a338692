"""Project Domain Entity

Projects carry the fee, margin and budget figures the financial engine works
from, plus the charge type, lifecycle stage and status used to group the
financial health dashboard.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdType
from src.domain.money import ZERO, to_decimal

DEFAULT_TARGET_PROFIT_MARGIN = Decimal("0.20")


class ProjectChargeType(str, Enum):
    """How the project is charged"""
    REGULAR = "REGULAR"
    OVERHEAD = "OVERHEAD"
    PROMOTIONAL = "PROMOTIONAL"

    @property
    def display_name(self) -> str:
        return _CHARGE_TYPE_DISPLAY[self]


class ProjectStage(str, Enum):
    """Lifecycle stages following the COA India scale of charges"""
    CONCEPT = "CONCEPT"
    PRELIM = "PRELIM"
    STATUTORY = "STATUTORY"
    TENDER = "TENDER"
    CONTRACT = "CONTRACT"
    CONSTRUCTION = "CONSTRUCTION"
    COMPLETION = "COMPLETION"

    @property
    def display_name(self) -> str:
        return _STAGE_DISPLAY[self]


class ProjectStatus(str, Enum):
    """Project status"""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DORMANT = "DORMANT"
    IN_DISCUSSION = "IN_DISCUSSION"
    PROGRESS = "PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"

    @property
    def display_name(self) -> str:
        return _STATUS_DISPLAY[self]


_CHARGE_TYPE_DISPLAY = {
    ProjectChargeType.REGULAR: "Regular",
    ProjectChargeType.OVERHEAD: "Overhead",
    ProjectChargeType.PROMOTIONAL: "Promotional",
}

_STAGE_DISPLAY = {
    ProjectStage.CONCEPT: "Concept Design",
    ProjectStage.PRELIM: "Preliminary Design",
    ProjectStage.STATUTORY: "Statutory Approvals (Liaison)",
    ProjectStage.TENDER: "Working Drawings & Tender",
    ProjectStage.CONTRACT: "Appointment of Contractor",
    ProjectStage.CONSTRUCTION: "Construction Supervision",
    ProjectStage.COMPLETION: "Completion & Handover",
}

_STATUS_DISPLAY = {
    ProjectStatus.ACTIVE: "Active",
    ProjectStatus.INACTIVE: "Inactive",
    ProjectStatus.DORMANT: "Dormant",
    ProjectStatus.IN_DISCUSSION: "In Discussion",
    ProjectStatus.PROGRESS: "In Progress",
    ProjectStatus.ON_HOLD: "On Hold",
    ProjectStatus.COMPLETED: "Completed",
    ProjectStatus.ARCHIVED: "Archived",
}

# Statuses whose invoices count towards the active-project dashboard metrics.
# Every aggregation query must use this set.
ACTIVE_PROJECT_STATUSES = frozenset({ProjectStatus.ACTIVE, ProjectStatus.PROGRESS})


def production_budget(total_fee, target_profit_margin) -> Decimal:
    """
    Portion of the fee available for delivery cost

    total_fee * (1 - target_profit_margin); zero when the fee is unknown and
    never negative.
    """
    if total_fee is None:
        return ZERO
    margin = (
        DEFAULT_TARGET_PROFIT_MARGIN
        if target_profit_margin is None
        else to_decimal(target_profit_margin)
    )
    budget = to_decimal(total_fee) * (Decimal("1") - margin)
    return budget if budget > ZERO else ZERO


class Project(BaseModel, table=True):
    """
    Project - Billable engagement of an organization

    Domain Rules:
    - target_profit_margin is a fraction between 0 and 1
    - production_budget = total_fee * (1 - target_profit_margin), never negative
    - Cumulative invoices on a project never exceed total_fee
    """

    __tablename__ = "projects"
    __table_args__ = (
        Index('ix_projects_organization_id', 'organization_id'),
        Index('ix_projects_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique project identifier (auto-increment)"
    )

    organization_id: int = Field(
        foreign_key="organizations.id",
        description="Owning organization"
    )

    client_id: Optional[int] = Field(
        default=None,
        foreign_key="clients.id",
        description="Billed client"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Project name"
    )

    total_fee: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(15, 2), nullable=True),
        description="Total professional fee"
    )

    target_profit_margin: Optional[Decimal] = Field(
        default=DEFAULT_TARGET_PROFIT_MARGIN,
        sa_column=Column(Numeric(5, 4), nullable=True),
        description="Target profit margin as a fraction (0.20 = 20%)"
    )

    budget: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(15, 2), nullable=True),
        description="Project budget"
    )

    actual_cost: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(15, 2), nullable=True),
        description="Actual cost incurred"
    )

    charge_type: ProjectChargeType = Field(
        default=ProjectChargeType.REGULAR,
        description="Charge type (regular, overhead, promotional)"
    )

    stage: Optional[ProjectStage] = Field(
        default=None,
        description="Current lifecycle stage"
    )

    status: ProjectStatus = Field(
        default=ProjectStatus.ACTIVE,
        description="Project status"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Project creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def production_budget(self) -> Decimal:
        return production_budget(self.total_fee, self.target_profit_margin)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_PROJECT_STATUSES
