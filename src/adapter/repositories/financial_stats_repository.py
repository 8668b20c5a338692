"""SQLAlchemy Financial Statistics Repository Implementation

Grouped invoice and project aggregates for the financial health dashboard.
Every active-scoped query filters on ACTIVE_PROJECT_STATUSES.
"""

from typing import Dict, List
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.financial_stats_repository import FinancialStatsRepository
from src.domain.financial_health import AggregateRow, GroupedInvoiceStats, Key
from src.domain.invoice import Invoice
from src.domain.project import ACTIVE_PROJECT_STATUSES, Project

_ACTIVE = list(ACTIVE_PROJECT_STATUSES)


def _invoice_totals():
    return (
        func.count(Invoice.id),
        func.coalesce(func.sum(Invoice.total_amount), 0),
        func.coalesce(func.sum(Invoice.paid_amount), 0),
        func.coalesce(func.sum(Invoice.balance_amount), 0),
    )


def _row(key: Key, count, total, paid, outstanding) -> AggregateRow:
    return AggregateRow(
        key=key,
        count=count or 0,
        total_amount=total,
        paid_amount=paid,
        outstanding_amount=outstanding,
    )


class SqlAlchemyFinancialStatsRepository(FinancialStatsRepository):
    """
    SQLAlchemy implementation of FinancialStatsRepository

    Invoices without a project count as active; charge type and stage
    breakdowns only see project invoices.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_grouped_stats(self, organization_id: int) -> GroupedInvoiceStats:
        budget, actual_cost, active_projects = await self._active_project_totals(organization_id)
        return GroupedInvoiceStats(
            active_overall=await self._overall(organization_id, active_only=True),
            all_overall=await self._overall(organization_id, active_only=False),
            by_status=await self._by_status(organization_id),
            by_charge_type=await self._by_project_column(organization_id, Project.charge_type),
            by_stage=await self._by_project_column(organization_id, Project.stage),
            project_count_by_charge_type=await self._project_counts(organization_id, Project.charge_type),
            project_count_by_stage=await self._project_counts(organization_id, Project.stage),
            active_project_count=active_projects,
            active_total_budget=budget,
            active_total_actual_cost=actual_cost,
        )

    def _active_scope(self):
        return or_(Invoice.project_id.is_(None), Project.status.in_(_ACTIVE))

    async def _overall(self, organization_id: int, active_only: bool) -> AggregateRow:
        statement = select(*_invoice_totals()).where(Invoice.organization_id == organization_id)
        if active_only:
            statement = statement.select_from(Invoice).outerjoin(
                Project, Invoice.project_id == Project.id
            ).where(self._active_scope())
        result = await self.session.execute(statement)
        count, total, paid, outstanding = result.one()
        return _row(None, count, total, paid, outstanding)

    async def _by_status(self, organization_id: int) -> List[AggregateRow]:
        statement = (
            select(Invoice.status, *_invoice_totals())
            .select_from(Invoice)
            .outerjoin(Project, Invoice.project_id == Project.id)
            .where(Invoice.organization_id == organization_id)
            .where(self._active_scope())
            .group_by(Invoice.status)
        )
        result = await self.session.execute(statement)
        return [_row(*row) for row in result.all()]

    async def _by_project_column(self, organization_id: int, column) -> List[AggregateRow]:
        statement = (
            select(column, *_invoice_totals())
            .select_from(Invoice)
            .join(Project, Invoice.project_id == Project.id)
            .where(Invoice.organization_id == organization_id)
            .where(Project.status.in_(_ACTIVE))
            .group_by(column)
        )
        result = await self.session.execute(statement)
        return [_row(*row) for row in result.all()]

    async def _project_counts(self, organization_id: int, column) -> Dict[Key, int]:
        statement = (
            select(column, func.count(Project.id))
            .where(Project.organization_id == organization_id)
            .where(Project.status.in_(_ACTIVE))
            .group_by(column)
        )
        result = await self.session.execute(statement)
        return {key: count for key, count in result.all()}

    async def _active_project_totals(self, organization_id: int):
        statement = (
            select(
                func.coalesce(func.sum(Project.budget), 0),
                func.coalesce(func.sum(Project.actual_cost), 0),
                func.count(Project.id),
            )
            .where(Project.organization_id == organization_id)
            .where(Project.status.in_(_ACTIVE))
        )
        result = await self.session.execute(statement)
        budget, actual_cost, count = result.one()
        return budget, actual_cost, count or 0
