"""Shared fixtures for unit tests"""

import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock unit of work; commit/rollback are awaitable"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_invoice_line_repo():
    """Line repository that assigns sequential ids on create_many"""
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=[])
    repo.delete_by_invoice_id = AsyncMock()

    async def create_many(lines):
        for index, line in enumerate(lines, start=1):
            line.id = index
        return lines

    repo.create_many = AsyncMock(side_effect=create_many)
    return repo
