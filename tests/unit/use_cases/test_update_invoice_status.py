"""Unit tests for UpdateInvoiceStatus and DeleteInvoice use cases"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.delete_invoice import DeleteInvoice
from src.app.use_cases.billing.dtos import UpdateInvoiceStatusCommandDTO
from src.app.use_cases.billing.update_invoice_status import UpdateInvoiceStatus
from src.domain.invoice import Invoice, InvoiceStatus


@pytest.fixture
def draft_invoice():
    today = date.today()
    return Invoice(
        id=10,
        organization_id=1,
        invoice_number="ACME-2024-003",
        issue_date=today,
        due_date=today + timedelta(days=30),
        status=InvoiceStatus.DRAFT,
        total_amount=Decimal("1180.00"),
        balance_amount=Decimal("1180.00"),
    )


@pytest.fixture
def mock_invoice_repo(draft_invoice):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=draft_invoice)
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def status_use_case(mock_uow, mock_invoice_repo):
    return UpdateInvoiceStatus(uow=mock_uow, invoice_repo=mock_invoice_repo)


@pytest.fixture
def delete_use_case(mock_uow, mock_invoice_repo, mock_invoice_line_repo):
    return DeleteInvoice(uow=mock_uow, invoice_repo=mock_invoice_repo, invoice_line_repo=mock_invoice_line_repo)


def _command(status: str) -> UpdateInvoiceStatusCommandDTO:
    return UpdateInvoiceStatusCommandDTO(invoice_id=10, organization_id=1, status=status)


@pytest.mark.asyncio
class TestUpdateInvoiceStatus:
    async def test_draft_to_sent(self, status_use_case, mock_uow):
        result = await status_use_case.execute(_command("sent"))

        assert result.is_ok()
        assert result.value.status == "SENT"
        mock_uow.commit.assert_called_once()

    async def test_cancel(self, status_use_case):
        result = await status_use_case.execute(_command("CANCELLED"))

        assert result.is_ok()
        assert result.value.status == "CANCELLED"

    async def test_unknown_status(self, status_use_case, mock_invoice_repo):
        result = await status_use_case.execute(_command("ARCHIVED"))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS"
        mock_invoice_repo.get_by_id.assert_not_called()

    @pytest.mark.parametrize("status", ["OVERDUE", "PAID"])
    async def test_derived_or_payment_statuses_cannot_be_set(self, status_use_case, status):
        result = await status_use_case.execute(_command(status))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"

    async def test_paid_invoice_is_final(self, status_use_case, draft_invoice, mock_invoice_repo):
        draft_invoice.status = InvoiceStatus.PAID

        result = await status_use_case.execute(_command("CANCELLED"))

        assert result.is_err()
        assert result.error.code == "INVOICE_ALREADY_PAID"
        mock_invoice_repo.update.assert_not_called()

    async def test_invoice_not_found(self, status_use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await status_use_case.execute(_command("SENT"))

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_repository_failure(self, status_use_case, mock_invoice_repo, mock_uow):
        mock_invoice_repo.update = AsyncMock(side_effect=RuntimeError("boom"))

        result = await status_use_case.execute(_command("SENT"))

        assert result.is_err()
        assert result.error.code == "UPDATE_INVOICE_STATUS_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestDeleteInvoice:
    async def test_delete_draft(
        self, delete_use_case, mock_invoice_repo, mock_invoice_line_repo, draft_invoice, mock_uow
    ):
        result = await delete_use_case.execute(10, 1)

        assert result.is_ok()
        assert result.value is True
        mock_invoice_line_repo.delete_by_invoice_id.assert_called_once_with(draft_invoice.id)
        mock_invoice_repo.delete.assert_called_once_with(draft_invoice)
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize("status", [InvoiceStatus.SENT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED])
    async def test_only_drafts_can_be_deleted(self, delete_use_case, draft_invoice, mock_invoice_repo, status):
        draft_invoice.status = status

        result = await delete_use_case.execute(10, 1)

        assert result.is_err()
        assert result.error.code == "INVALID_INVOICE_STATUS"
        mock_invoice_repo.delete.assert_not_called()

    async def test_invoice_not_found(self, delete_use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await delete_use_case.execute(99, 1)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
