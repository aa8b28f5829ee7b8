# sar_api/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sar_api.api.middleware import AuditTriggerMiddleware, CorrelationIdMiddleware
from sar_api.api.routers import health, sars
from sar_api.application.exceptions import (
    ApplicationError,
    SarNotFoundError,
    StoreUnavailableError,
)
from sar_api.config.logging import configure_logging
from sar_api.config.settings import get_settings
from sar_api.domain.exceptions import (
    DomainError,
    DomainValidationError,
    ImmutableRecordError,
    InvalidArgumentError,
    InvalidTransitionError,
)
from sar_api.domain.schemas.sar import ApiResponse, FieldErrorResponse

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.store_backend == "database":
        from sar_api.infrastructure.database.session import create_schema

        await create_schema()
    yield
    if settings.store_backend == "redis":
        from sar_api.api.dependencies import get_redis_client

        await get_redis_client().close()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    description="API for managing Suspicious Activity Reports (SARs)",
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CORS -> CorrelationId -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID"],
)


def _error(status_code: int, message: str, errors: list[FieldErrorResponse] | None = None) -> JSONResponse:
    body = ApiResponse(success=False, message=message, errors=errors or [])
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, mode="json"))


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request: Request, exc: DomainValidationError):
    errors = [FieldErrorResponse(field=e.field, message=e.message) for e in exc.errors]
    return _error(400, exc.message, errors)


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_error_handler(request: Request, exc: InvalidArgumentError):
    return _error(400, exc.message)


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_error_handler(request: Request, exc: InvalidTransitionError):
    return _error(409, exc.message)


@app.exception_handler(ImmutableRecordError)
async def immutable_record_error_handler(request: Request, exc: ImmutableRecordError):
    return _error(409, exc.message)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return _error(400, exc.message)


@app.exception_handler(SarNotFoundError)
async def not_found_error_handler(request: Request, exc: SarNotFoundError):
    return _error(404, exc.message)


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_error_handler(request: Request, exc: StoreUnavailableError):
    logger.error("store_unavailable", extra={"error": exc.message})
    return _error(503, "Record store is unavailable")


@app.exception_handler(ApplicationError)
async def application_error_handler(request: Request, exc: ApplicationError):
    return _error(500, exc.message)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error")
    return _error(500, "Internal server error")


# Routers: /health, /api/sar
app.include_router(health.router)
app.include_router(sars.router, prefix="/api/sar")
