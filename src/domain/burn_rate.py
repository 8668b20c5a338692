"""Burn Rate / Budget Health Evaluator

Compares the cost booked through resource assignments with the production
budget of a project (its fee minus the target profit margin).

    production_budget = total_fee * (1 - target_profit_margin)
    current_burn      = sum(hours * burn_rate)
    burn_percentage   = round(current_burn / production_budget, 4) * 100
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_DOWN
from enum import Enum
from typing import Optional, Sequence, Tuple
from src.domain.money import ZERO, Number, percentage, to_decimal
from src.domain.project import DEFAULT_TARGET_PROFIT_MARGIN, production_budget

WARNING_THRESHOLD = Decimal("75")
CRITICAL_THRESHOLD = Decimal("100")


class BudgetHealth(str, Enum):
    """Budget health classification"""
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


def classify_burn(burn_percentage: Decimal) -> BudgetHealth:
    """critical above 100%, warning above 75%, otherwise healthy (strict)"""
    if burn_percentage > CRITICAL_THRESHOLD:
        return BudgetHealth.CRITICAL
    if burn_percentage > WARNING_THRESHOLD:
        return BudgetHealth.WARNING
    return BudgetHealth.HEALTHY


@dataclass(frozen=True)
class AssignmentCost:
    """Hours booked at a cost rate"""

    hours: Optional[Number]
    burn_rate: Optional[Number]

    @property
    def cost(self) -> Decimal:
        return to_decimal(self.hours) * to_decimal(self.burn_rate)


@dataclass(frozen=True)
class PhaseBudget:
    """Input row for one phase: its contract amount and assignments"""

    phase_id: int
    phase_name: str
    contract_amount: Optional[Number]
    assignments: Sequence[AssignmentCost] = field(default_factory=tuple)

    @property
    def burn(self) -> Decimal:
        return sum((assignment.cost for assignment in self.assignments), ZERO)


@dataclass(frozen=True)
class PhaseBurn:
    phase_id: int
    phase_name: str
    phase_budget: Decimal
    phase_burn: Decimal
    burn_percentage: Decimal


@dataclass(frozen=True)
class BurnRateSnapshot:
    """
    Budget health of a project at a point in time

    Built once by compute_burn_rate; the phase breakdown is owned by the
    snapshot and is an immutable tuple.
    """

    total_fee: Decimal
    target_profit_margin: Decimal
    production_budget: Decimal
    current_burn: Decimal
    burn_percentage: Decimal
    over_budget: bool
    status: BudgetHealth
    phase_breakdown: Tuple[PhaseBurn, ...] = ()


@dataclass(frozen=True)
class PhaseAvailability:
    """Budget left on a phase and the hours it still pays for"""

    total_budget: Decimal
    current_burn: Decimal
    remaining_budget: Decimal
    burn_rate: Decimal
    max_hours_by_budget: int


def _phase_burn(phase: PhaseBudget) -> PhaseBurn:
    budget = to_decimal(phase.contract_amount)
    burn = phase.burn
    return PhaseBurn(
        phase_id=phase.phase_id,
        phase_name=phase.phase_name,
        phase_budget=budget,
        phase_burn=burn,
        burn_percentage=percentage(burn, budget),
    )


def compute_burn_rate(
    total_fee: Optional[Number],
    target_profit_margin: Optional[Number],
    phases: Sequence[PhaseBudget],
) -> BurnRateSnapshot:
    """
    Evaluate burn against the production budget

    Args:
        total_fee: Project total fee (None means no budget)
        target_profit_margin: Margin as a fraction; None uses the default 0.20
        phases: Phases with their contract amounts and assignment costs

    Returns:
        BurnRateSnapshot; a zero budget yields 0%, healthy, not over budget
    """
    margin = (
        DEFAULT_TARGET_PROFIT_MARGIN
        if target_profit_margin is None
        else to_decimal(target_profit_margin)
    )
    budget = production_budget(total_fee, margin)
    breakdown = tuple(_phase_burn(phase) for phase in phases)
    current_burn = sum((phase.phase_burn for phase in breakdown), ZERO)

    if budget > ZERO:
        burn_pct = percentage(current_burn, budget)
        over_budget = current_burn > budget
        status = classify_burn(burn_pct)
    else:
        burn_pct = ZERO
        over_budget = False
        status = BudgetHealth.HEALTHY

    return BurnRateSnapshot(
        total_fee=to_decimal(total_fee),
        target_profit_margin=margin,
        production_budget=budget,
        current_burn=current_burn,
        burn_percentage=burn_pct,
        over_budget=over_budget,
        status=status,
        phase_breakdown=breakdown,
    )


def phase_budget_availability(
    contract_amount: Optional[Number],
    assignments: Sequence[AssignmentCost],
    burn_rate: Optional[Number],
) -> PhaseAvailability:
    """
    Remaining phase budget and how many hours it covers at burn_rate

    max_hours_by_budget is rounded down and is 0 for a non-positive rate.
    """
    total_budget = to_decimal(contract_amount)
    current_burn = sum((assignment.cost for assignment in assignments), ZERO)
    remaining = total_budget - current_burn
    rate = to_decimal(burn_rate)

    max_hours = 0
    if rate > ZERO:
        max_hours = int((remaining / rate).to_integral_value(rounding=ROUND_DOWN))

    return PhaseAvailability(
        total_budget=total_budget,
        current_burn=current_burn,
        remaining_budget=remaining,
        burn_rate=rate,
        max_hours_by_budget=max_hours,
    )
