"""Unit of Work Interface

Groups repository writes of one use case into a single transaction.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of a use case"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
