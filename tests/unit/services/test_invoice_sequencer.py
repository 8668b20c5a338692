"""Unit tests for InvoiceSequencer

Tests cover:
- Next number preview
- Concurrent allocations never share a number
- Bounded retry on conflicts
"""

import asyncio
from datetime import date
import pytest
from unittest.mock import AsyncMock, MagicMock

from config import ApplicationConfig
from src.app.services.invoice_sequencer import InvoiceSequencer
from src.domain.errors import InvoiceNumberConflictError, SequenceAllocationError
from src.domain.invoice import Invoice
from src.domain.invoice_numbering import max_sequence


class RacingInvoiceRepository:
    """
    In-memory repository that yields between the max read and the insert

    Concurrent allocations interleave exactly like two database sessions
    reading the same max before either commits. The set of numbers plays
    the unique constraint.
    """

    def __init__(self):
        self.numbers = set()
        self.conflicts = 0

    async def get_max_sequence(self, prefix):
        current = max_sequence(self.numbers, prefix)
        await asyncio.sleep(0)
        return current

    async def reserve_and_create(self, invoice):
        await asyncio.sleep(0)
        if invoice.invoice_number in self.numbers:
            self.conflicts += 1
            raise InvoiceNumberConflictError(invoice.invoice_number)
        self.numbers.add(invoice.invoice_number)
        return invoice


def _invoice() -> Invoice:
    return Invoice(
        organization_id=1,
        invoice_number="",
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 31),
    )


@pytest.mark.asyncio
class TestNextInvoiceNumber:
    async def test_preview_uses_max_sequence(self):
        repo = MagicMock()
        repo.get_max_sequence = AsyncMock(return_value=7)
        sequencer = InvoiceSequencer(repo)

        number = await sequencer.next_invoice_number(1, 2024, "ACME-2024-")

        assert number == "ACME-2024-008"
        repo.get_max_sequence.assert_called_once_with("ACME-2024-")

    async def test_preview_with_custom_padding(self):
        repo = MagicMock()
        repo.get_max_sequence = AsyncMock(return_value=0)
        sequencer = InvoiceSequencer(repo, padding=5)

        assert await sequencer.next_invoice_number(1, 2025, "INV-2025-") == "INV-2025-00001"


@pytest.mark.asyncio
class TestAllocate:
    async def test_allocate_assigns_next_number(self):
        repo = RacingInvoiceRepository()
        repo.numbers.update({"ACME-2024-001", "ACME-2024-002", "ACME-2024-007"})
        sequencer = InvoiceSequencer(repo)

        created = await sequencer.allocate(_invoice(), "ACME-2024-")

        assert created.invoice_number == "ACME-2024-008"

    async def test_concurrent_allocations_get_distinct_numbers(self):
        """
        Given: 5 invoices created concurrently for the same organization and year
        When: Each allocation reads the same max and races to insert
        Then: Numbers 001..005 are handed out exactly once
        """
        # Arrange
        repo = RacingInvoiceRepository()
        sequencer = InvoiceSequencer(repo, max_attempts=10)

        # Act
        created = await asyncio.gather(
            *(sequencer.allocate(_invoice(), "ACME-2024-") for _ in range(5))
        )

        # Assert
        numbers = sorted(invoice.invoice_number for invoice in created)
        assert numbers == [f"ACME-2024-{n:03d}" for n in range(1, 6)]
        assert repo.conflicts > 0

    async def test_retries_after_conflict(self):
        repo = MagicMock()
        repo.get_max_sequence = AsyncMock(side_effect=[0, 1])
        repo.reserve_and_create = AsyncMock(
            side_effect=[InvoiceNumberConflictError("ACME-2024-001"), "created"]
        )
        sequencer = InvoiceSequencer(repo, max_attempts=3)
        invoice = _invoice()

        result = await sequencer.allocate(invoice, "ACME-2024-")

        assert result == "created"
        assert invoice.invoice_number == "ACME-2024-002"
        assert repo.reserve_and_create.call_count == 2

    async def test_gives_up_after_max_attempts(self):
        """
        Given: Every insert collides
        When: Allocation is attempted with max_attempts=3
        Then: SequenceAllocationError after exactly 3 attempts
        """
        repo = MagicMock()
        repo.get_max_sequence = AsyncMock(return_value=0)
        repo.reserve_and_create = AsyncMock(
            side_effect=InvoiceNumberConflictError("ACME-2024-001")
        )
        sequencer = InvoiceSequencer(repo, max_attempts=3)

        with pytest.raises(SequenceAllocationError) as exc_info:
            await sequencer.allocate(_invoice(), "ACME-2024-")

        assert exc_info.value.code == "SEQUENCE_ALLOCATION_FAILED"
        assert exc_info.value.attempts == 3
        assert repo.reserve_and_create.call_count == 3

    async def test_other_errors_are_not_retried(self):
        repo = MagicMock()
        repo.get_max_sequence = AsyncMock(return_value=0)
        repo.reserve_and_create = AsyncMock(side_effect=RuntimeError("connection lost"))
        sequencer = InvoiceSequencer(repo)

        with pytest.raises(RuntimeError):
            await sequencer.allocate(_invoice(), "ACME-2024-")

        assert repo.reserve_and_create.call_count == 1


class TestSequencerConfig:
    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            InvoiceSequencer(MagicMock(), max_attempts=0)

    def test_defaults_come_from_application_config(self):
        sequencer = InvoiceSequencer(MagicMock())

        assert sequencer.max_attempts == ApplicationConfig.INVOICE_SEQUENCE_MAX_ATTEMPTS
        assert sequencer.padding == ApplicationConfig.INVOICE_NUMBER_PADDING
