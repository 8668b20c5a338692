from .organization_repository import OrganizationRepository, ClientRepository
from .project_repository import ProjectRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .financial_stats_repository import FinancialStatsRepository

__all__ = [
    "OrganizationRepository",
    "ClientRepository",
    "ProjectRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "FinancialStatsRepository",
]
