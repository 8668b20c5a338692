"""Organization and Client Domain Entities

An organization is the tenant that issues invoices; a client is the party
billed. Both carry the state used to pick the GST treatment.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, IdType


class Organization(BaseModel, table=True):
    """
    Organization - Tenant issuing invoices

    Domain Rules:
    - invoice_prefix overrides the code derived from the name
    - state drives intra-state vs inter-state GST
    """

    __tablename__ = "organizations"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique organization identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Organization display name"
    )

    state: Optional[str] = Field(
        default=None,
        description="State of registration (GST jurisdiction)"
    )

    invoice_prefix: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="Explicit invoice number prefix (e.g., INV)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Creation timestamp"
    )


class Client(BaseModel, table=True):
    """Client - Billed party of a project"""

    __tablename__ = "clients"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique client identifier (auto-increment)"
    )

    organization_id: int = Field(
        foreign_key="organizations.id",
        index=True,
        description="Owning organization"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client name"
    )

    email: Optional[str] = Field(default=None, description="Billing email")

    billing_address: Optional[str] = Field(default=None, description="Billing address")

    state: Optional[str] = Field(
        default=None,
        description="Client state (GST jurisdiction)"
    )
