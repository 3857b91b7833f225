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
from redis.exceptions import RedisError
from sqlalchemy import text

from config.settings import settings
from src.ft_analytics.api.router import router as analytics_router
from src.ft_common.database import engine
from src.ft_common.errors import AppError
from src.ft_common.redis_client import close_redis, create_redis
from src.ft_common.response import error_response
from src.ft_gateway.middleware.request_log import RequestLogMiddleware
from src.ft_transaction.api.router import router as transaction_router

logger = logging.getLogger("ft.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB, open Redis. Shutdown: dispose both."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    app.state.redis = create_redis()
    try:
        await app.state.redis.ping()
    except (RedisError, OSError) as exc:
        logger.warning("Redis not reachable at startup, serving uncached: %s", exc)
    yield
    await engine.dispose()
    await close_redis(app.state.redis)


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(analytics_router, prefix="/api/v1")
app.include_router(transaction_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
