"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.vm_account.api.router import router as account_router
from src.vm_catalog.api.router import router as catalog_router
from src.vm_common.database import engine, ping
from src.vm_common.errors import (
    AppError,
    InternalError,
    InvalidPayloadError,
    StoreUnavailableError,
)
from src.vm_common.response import error_response
from src.vm_common.transaction import is_store_unavailable
from src.vm_gateway.api.router import router as auth_router
from src.vm_gateway.api.users_router import router as users_router
from src.vm_gateway.middleware.request_log import RequestLogMiddleware
from src.vm_purchase.api.router import router as purchase_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB connection. Shutdown: dispose the pool."""
    await ping()
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, exc.kind.value)
    resp.request_id = _request_id(request) or resp.request_id
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{field}: {first.get('msg', 'invalid')}" if field else first.get("msg", "invalid")
    err = InvalidPayloadError(detail)
    resp = error_response(err.code, err.message, err.kind.value)
    resp.request_id = _request_id(request) or resp.request_id
    return JSONResponse(status_code=err.http_status, content=resp.model_dump())


@app.exception_handler(SQLAlchemyError)
@app.exception_handler(OSError)
async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store failures raised outside transaction(db), e.g. on read-only paths."""
    if is_store_unavailable(exc):
        logger.warning("Store unavailable on %s: %s", request.url.path, exc)
        err: AppError = StoreUnavailableError()
    else:
        logger.error("Unhandled store error on %s", request.url.path, exc_info=exc)
        err = InternalError()
    return await app_error_handler(request, err)


app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(purchase_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
