from .organization_repository import SqlAlchemyOrganizationRepository, SqlAlchemyClientRepository
from .project_repository import SqlAlchemyProjectRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .financial_stats_repository import SqlAlchemyFinancialStatsRepository

__all__ = [
    "SqlAlchemyOrganizationRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyFinancialStatsRepository",
]
