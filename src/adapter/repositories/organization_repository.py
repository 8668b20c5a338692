"""SQLAlchemy Organization and Client Repository Implementations"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.organization_repository import ClientRepository, OrganizationRepository
from src.domain.organization import Client, Organization


class SqlAlchemyOrganizationRepository(OrganizationRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, organization_id: int) -> Optional[Organization]:
        statement = select(Organization).where(Organization.id == organization_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()


class SqlAlchemyClientRepository(ClientRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, client_id: int) -> Optional[Client]:
        statement = select(Client).where(Client.id == client_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
