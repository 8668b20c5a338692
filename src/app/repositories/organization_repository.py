"""Organization and Client Repository Interfaces"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.organization import Client, Organization


class OrganizationRepository(ABC):
    """Repository interface for Organization lookups"""

    @abstractmethod
    async def get_by_id(self, organization_id: int) -> Optional[Organization]:
        """
        Retrieve organization by ID

        Args:
            organization_id: Organization ID

        Returns:
            Organization if found, None otherwise
        """
        pass


class ClientRepository(ABC):
    """Repository interface for Client lookups"""

    @abstractmethod
    async def get_by_id(self, client_id: int) -> Optional[Client]:
        pass
