"""Financial Health Aggregator

Assembles the organization dashboard from invoice totals that the
persistence layer has already grouped by invoice status, project charge type
and project stage.

Two overall views are kept apart:
- active_overall: invoices of active projects (or with no project)
- all_invoices_overall: every invoice of the organization

Project figures (active project count, budget, actual cost) always describe
active projects, in both views. Only the invoice totals differ.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, Union
from src.domain.invoice import InvoiceStatus
from src.domain.money import ZERO, Number, percentage, to_decimal
from src.domain.project import ProjectChargeType, ProjectStage

Key = Union[str, Enum, None]


@dataclass(frozen=True)
class AggregateRow:
    """One grouped row: (key, count, total, paid, outstanding)"""

    key: Key
    count: int = 0
    total_amount: Number = ZERO
    paid_amount: Number = ZERO
    outstanding_amount: Number = ZERO


@dataclass(frozen=True)
class GroupedInvoiceStats:
    """Everything the aggregator needs, fetched for one organization"""

    active_overall: AggregateRow = field(default_factory=lambda: AggregateRow(key=None))
    all_overall: AggregateRow = field(default_factory=lambda: AggregateRow(key=None))
    by_status: Sequence[AggregateRow] = ()
    by_charge_type: Sequence[AggregateRow] = ()
    by_stage: Sequence[AggregateRow] = ()
    project_count_by_charge_type: Mapping[Key, int] = field(default_factory=dict)
    project_count_by_stage: Mapping[Key, int] = field(default_factory=dict)
    active_project_count: int = 0
    active_total_budget: Number = ZERO
    active_total_actual_cost: Number = ZERO


@dataclass(frozen=True)
class OverallMetrics:
    """
    Invoice totals of one overall view

    total_active_projects, total_budget and total_actual_cost are scoped to
    active projects whichever view the metrics belong to.
    """

    total_active_projects: int
    total_invoices: int
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    total_budget: Decimal
    total_actual_cost: Decimal
    collection_rate: Decimal


@dataclass(frozen=True)
class DimensionMetrics:
    """Metrics for one value of a breakdown dimension"""

    key: str
    display_name: str
    project_count: int
    invoice_count: int
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    collection_rate: Decimal


@dataclass(frozen=True)
class FinancialHealthSnapshot:
    active_overall: OverallMetrics
    all_invoices_overall: OverallMetrics
    by_charge_type: Tuple[DimensionMetrics, ...]
    by_project_stage: Tuple[DimensionMetrics, ...]
    by_invoice_status: Tuple[DimensionMetrics, ...]


def collection_rate(total_paid: Optional[Number], total_invoiced: Optional[Number]) -> Decimal:
    """Paid as a percentage of invoiced; 0 when nothing was invoiced"""
    return percentage(total_paid, total_invoiced)


def _key_name(key: Key) -> Optional[str]:
    if key is None:
        return None
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def _display_name(enum_cls: Type[Enum], key: str) -> str:
    try:
        return enum_cls(key).display_name
    except ValueError:
        return key


class _Accumulator:
    __slots__ = ("invoice_count", "total_invoiced", "total_paid", "total_outstanding", "project_count")

    def __init__(self):
        self.invoice_count = 0
        self.total_invoiced = ZERO
        self.total_paid = ZERO
        self.total_outstanding = ZERO
        self.project_count = 0

    def add(self, row: AggregateRow) -> None:
        self.invoice_count += int(row.count or 0)
        self.total_invoiced += to_decimal(row.total_amount)
        self.total_paid += to_decimal(row.paid_amount)
        self.total_outstanding += to_decimal(row.outstanding_amount)


def _breakdown(
    rows: Iterable[AggregateRow],
    project_counts: Mapping[Key, int],
    enum_cls: Type[Enum],
) -> Tuple[DimensionMetrics, ...]:
    merged: Dict[str, _Accumulator] = {}

    for row in rows:
        name = _key_name(row.key)
        if name is None:
            continue
        merged.setdefault(name, _Accumulator()).add(row)

    for key, count in project_counts.items():
        name = _key_name(key)
        if name is None:
            continue
        merged.setdefault(name, _Accumulator()).project_count = int(count or 0)

    order = {member.value: index for index, member in enumerate(enum_cls)}
    ordered: List[str] = sorted(merged, key=lambda name: (order.get(name, len(order)), name))

    return tuple(
        DimensionMetrics(
            key=name,
            display_name=_display_name(enum_cls, name),
            project_count=merged[name].project_count,
            invoice_count=merged[name].invoice_count,
            total_invoiced=merged[name].total_invoiced,
            total_paid=merged[name].total_paid,
            total_outstanding=merged[name].total_outstanding,
            collection_rate=collection_rate(merged[name].total_paid, merged[name].total_invoiced),
        )
        for name in ordered
    )


def _overall(row: AggregateRow, stats: GroupedInvoiceStats) -> OverallMetrics:
    total_invoiced = to_decimal(row.total_amount)
    total_paid = to_decimal(row.paid_amount)
    return OverallMetrics(
        total_active_projects=int(stats.active_project_count or 0),
        total_invoices=int(row.count or 0),
        total_invoiced=total_invoiced,
        total_paid=total_paid,
        total_outstanding=to_decimal(row.outstanding_amount),
        total_budget=to_decimal(stats.active_total_budget),
        total_actual_cost=to_decimal(stats.active_total_actual_cost),
        collection_rate=collection_rate(total_paid, total_invoiced),
    )


def compute_financial_health(stats: GroupedInvoiceStats) -> FinancialHealthSnapshot:
    """
    Build the dashboard snapshot from grouped rows

    Rows with a null key are skipped; rows sharing a key are merged.
    Nothing here raises on empty input: an organization without invoices
    gets an all-zero snapshot.
    """
    return FinancialHealthSnapshot(
        active_overall=_overall(stats.active_overall, stats),
        all_invoices_overall=_overall(stats.all_overall, stats),
        by_charge_type=_breakdown(
            stats.by_charge_type, stats.project_count_by_charge_type, ProjectChargeType
        ),
        by_project_stage=_breakdown(
            stats.by_stage, stats.project_count_by_stage, ProjectStage
        ),
        by_invoice_status=_breakdown(stats.by_status, {}, InvoiceStatus),
    )
