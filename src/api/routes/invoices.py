"""Invoice API Routes

FastAPI routes for progress-billing invoices: creation, draft edits, numbering
preview, statistics, payments, status changes, deletion and PDF download.
"""

import base64
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import Optional

from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    RecordPaymentRequestSchema,
    UpdateInvoiceRequestSchema,
    UpdateInvoiceStatusRequestSchema,
)
from src.app.services.invoice_sequencer import InvoiceSequencer
from src.app.use_cases.billing.dtos import (
    CreateInvoiceCommandDTO,
    InvoiceResponseDTO,
    InvoiceStatisticsDTO,
    NextInvoiceNumberDTO,
    RecordPaymentCommandDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
)
from src.app.use_cases.billing.create_invoice import CreateInvoice
from src.app.use_cases.billing.delete_invoice import DeleteInvoice
from src.app.use_cases.billing.generate_invoice_pdf import GenerateInvoicePdf
from src.app.use_cases.billing.get_invoice_statistics import GetInvoiceStatistics
from src.app.use_cases.billing.get_next_invoice_number import GetNextInvoiceNumber
from src.app.use_cases.billing.record_payment import RecordPayment
from src.app.use_cases.billing.update_invoice import UpdateInvoice
from src.app.use_cases.billing.update_invoice_status import UpdateInvoiceStatus
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.organization_repository import (
    SqlAlchemyClientRepository,
    SqlAlchemyOrganizationRepository,
)
from src.adapter.repositories.project_repository import SqlAlchemyProjectRepository
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import raise_for_error

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Organization or project not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PROJECT_NOT_FOUND",
                            "message": "Project 42 not found"
                        }
                    }
                }
            }
        },
        409: {
            "description": "Invoice number could not be allocated",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SEQUENCE_ALLOCATION_FAILED",
                            "message": "Could not allocate a unique invoice number, please retry"
                        }
                    }
                }
            }
        },
        422: {
            "description": "Cumulative billing rejected",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_BILLING_STATE",
                            "message": "Cumulative fee amount 100000.00 is below the already "
                                       "billed amount 700000.00"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Create a draft invoice.

    Project invoices bill up to `target_cumulative_percentage` of the project
    fee (defaults to the project stage schedule) minus what earlier invoices
    already billed. Tax is split into CGST + SGST for clients in the
    organization's state and IGST otherwise.

    Invoices without a project fee bill the sum of their `lines`, or an
    explicit `subtotal`.

    **Example request:**
    ```json
    {
      "organization_id": 1,
      "project_id": 42,
      "target_cumulative_percentage": "0.45"
    }
    ```

    **Returns:**
    - 201: Invoice created
    - 400: Lines given for an invoice billed against the project fee
    - 404: Organization or project not found
    - 409: Invoice number allocation exhausted
    - 422: Billing below the already billed amount or above the total fee
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=invoice_repo,
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        organization_repo=SqlAlchemyOrganizationRepository(session),
        project_repo=SqlAlchemyProjectRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
        sequencer=InvoiceSequencer(invoice_repo),
    )

    command = CreateInvoiceCommandDTO(**request.model_dump())
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/next-number",
    response_model=NextInvoiceNumberDTO,
    status_code=status.HTTP_200_OK,
)
async def get_next_invoice_number(
    organization_id: int = Query(..., gt=0),
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    session: AsyncSession = Depends(get_session)
):
    """
    Preview the next invoice number of an organization.

    The number is not reserved.
    """
    use_case = GetNextInvoiceNumber(
        SqlAlchemyOrganizationRepository(session),
        InvoiceSequencer(SqlAlchemyInvoiceRepository(session)),
    )
    result = await use_case.execute(organization_id, year)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/statistics",
    response_model=InvoiceStatisticsDTO,
    status_code=status.HTTP_200_OK,
)
async def get_invoice_statistics(
    organization_id: int = Query(..., gt=0),
    session: AsyncSession = Depends(get_session)
):
    """Invoice counts, outstanding balance and current-year revenue."""
    use_case = GetInvoiceStatistics(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(organization_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/payments",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def record_payment(
    invoice_id: int,
    request: RecordPaymentRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Record the full payment of an invoice.

    **Returns:**
    - 200: Invoice marked as paid
    - 400: Amount differs from the invoice total, or invoice is paid/cancelled
    - 404: Invoice not found
    """
    use_case = RecordPayment(SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session))
    command = RecordPaymentCommandDTO(invoice_id=invoice_id, **request.model_dump())
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Invoice is not a draft",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_INVOICE_STATUS",
                            "message": "Only draft invoices can be edited. Current status: SENT"
                        }
                    }
                }
            }
        },
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_FOUND",
                            "message": "Invoice with ID 123 not found"
                        }
                    }
                }
            }
        }
    }
)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Edit a draft invoice.

    Omitted fields keep their value. `lines` replaces all line items and sets
    the subtotal of invoices without a project fee. Tax and totals are
    recomputed; the cumulative fee fields never change.

    **Returns:**
    - 200: Invoice updated
    - 400: Invoice is not a draft, or lines given for a progress invoice
    - 404: Invoice not found
    """
    use_case = UpdateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        organization_repo=SqlAlchemyOrganizationRepository(session),
    )
    command = UpdateInvoiceCommandDTO(invoice_id=invoice_id, **request.model_dump())
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Change the status of an invoice (DRAFT, SENT, CANCELLED).

    OVERDUE is derived from the due date and PAID requires a payment.
    """
    use_case = UpdateInvoiceStatus(SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session))
    command = UpdateInvoiceStatusCommandDTO(invoice_id=invoice_id, **request.model_dump())
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_invoice(
    invoice_id: int,
    organization_id: int = Query(..., gt=0),
    session: AsyncSession = Depends(get_session)
):
    """Delete a draft invoice."""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(invoice_id, organization_id)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_FOUND",
                            "message": "Invoice with ID 123 not found"
                        }
                    }
                }
            }
        }
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    organization_id: int = Query(..., gt=0),
    session: AsyncSession = Depends(get_session)
):
    """
    Download an invoice as PDF.

    Draft invoices are rendered as PROFORMA, all others as TAX INVOICE.
    """
    use_case = GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyOrganizationRepository(session),
        ReportLabPdfService(),
    )
    result = await use_case.execute(invoice_id, organization_id)

    if result.is_err():
        raise_for_error(result.error)

    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=invoice_{result.value.invoice_number}.pdf"
        }
    )
