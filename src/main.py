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
from fastapi.responses import JSONResponse

from config.settings import settings
from src.sf_checkout.api.router import router as checkout_router
from src.sf_common.errors import AppError
from src.sf_common.http_client import close_http_client, get_http_client
from src.sf_common.middleware.request_log import RequestLogMiddleware
from src.sf_common.response import error_response
from src.sf_pricing.api.router import router as pricing_router
from src.sf_tax.api.router import router as tax_router
from src.sf_transaction.api.router import router as transaction_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: open the outbound HTTP pool. Shutdown: close it."""
    await get_http_client()
    if settings.TAX_ENABLED and not settings.STRIPE_SECRET_KEY:
        logger.warning("TAX_ENABLED without STRIPE_SECRET_KEY: manual VAT table only")
    yield
    await close_http_client()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc, request)
    if exc.http_status >= 500:
        logger.error("AppError %d on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(pricing_router, prefix="/api/v1")
app.include_router(tax_router, prefix="/api/v1")
app.include_router(checkout_router, prefix="/api/v1")
app.include_router(transaction_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
