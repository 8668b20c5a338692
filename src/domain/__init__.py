from .base import BaseModel
from .organization import Organization, Client
from .project import (
    Project,
    ProjectChargeType,
    ProjectStage,
    ProjectStatus,
    ACTIVE_PROJECT_STATUSES,
)
from .phase import Phase, PhaseSubstage, ResourceAssignment, CompletionStatus
from .invoice import Invoice, InvoiceStatus
from .invoice_line import InvoiceLine
from .errors import (
    BillingError,
    InvalidBillingStateError,
    FeeExceededError,
    InvoiceNumberConflictError,
    SequenceAllocationError,
)

__all__ = [
    "BaseModel",
    "Organization",
    "Client",
    "Project",
    "ProjectChargeType",
    "ProjectStage",
    "ProjectStatus",
    "ACTIVE_PROJECT_STATUSES",
    "Phase",
    "PhaseSubstage",
    "ResourceAssignment",
    "CompletionStatus",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLine",
    "BillingError",
    "InvalidBillingStateError",
    "FeeExceededError",
    "InvoiceNumberConflictError",
    "SequenceAllocationError",
]
