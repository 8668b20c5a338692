"""API error handling

Use cases report failures as Result errors; routes raise ClientError and the
handler renders them as {"error": {"code", "message"}}.
"""

import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from src.libs.result import Error

logger = logging.getLogger(__name__)

# Error codes mapped to non-default HTTP statuses
NOT_FOUND_CODES = frozenset({
    "ORGANIZATION_NOT_FOUND",
    "PROJECT_NOT_FOUND",
    "PHASE_NOT_FOUND",
    "INVOICE_NOT_FOUND",
})
INVARIANT_CODES = frozenset({
    "INVALID_BILLING_STATE",
    "FEE_EXCEEDED",
})
CONFLICT_CODES = frozenset({
    "SEQUENCE_ALLOCATION_FAILED",
})


class ClientError(Exception):
    """Error returned to the API caller with an HTTP status"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.error = error
        self.status_code = status_code
        super().__init__(error.message)


def status_for(error: Error) -> int:
    """HTTP status for a use case error code"""
    if error.code in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    if error.code in INVARIANT_CODES:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if error.code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


def raise_for_error(error: Error) -> None:
    raise ClientError(error, status_code=status_for(error))


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.error.reason:
        logger.info(f"{request.method} {request.url.path} -> {exc.error.code}: {exc.error.reason}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request parameters",
                "details": jsonable_errors(exc),
            }
        },
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
