"""
FastAPI application entry point for the portfolio content service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from portfolio.config import get_settings
from portfolio.dependencies import get_migration_runner
from portfolio.local_store import LocalStorageUnavailableError
from portfolio.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_settings().migrate_on_startup:
        report = await run_in_threadpool(get_migration_runner().run)
        if report.failed:
            logger.warning("Startup migration left failures: %s", report.failed)
    yield


async def local_storage_unavailable(
    request: Request, exc: LocalStorageUnavailableError
) -> JSONResponse:
    logger.error("Local storage unavailable for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503, content={"detail": "Failed to save, please try again."}
    )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Portfolio Content API", version="0.1.0", lifespan=lifespan)
    app.add_exception_handler(LocalStorageUnavailableError, local_storage_unavailable)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
