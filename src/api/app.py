"""FastAPI application factory"""

import logging
import time
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.error import ClientError, client_error_handler, validation_error_handler
from src.api.routes import financial_health, invoices, projects

logger = logging.getLogger(__name__)


def _init_sentry(config) -> None:
    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.1,
    )
    logger.info(f"Sentry enabled ({config.SENTRY_ENVIRONMENT})")


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        _init_sentry(config)

    app = FastAPI(
        title="Progress Billing Service",
        version="1.0.0",
        description=(
            "Progress billing for project-based practices: cumulative fee "
            "invoices with GST split, invoice numbering, budget burn and "
            "organization financial health."
        ),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(projects.router, prefix=config.API_PREFIX)
    app.include_router(projects.phase_router, prefix=config.API_PREFIX)
    app.include_router(financial_health.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
