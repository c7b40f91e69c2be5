"""Entrypoint serving the reconciler's health and inspection API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from flink_reconciler import __version__
from flink_reconciler.api import api_router
from flink_reconciler.api.dependencies import get_flink_controller, get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the API exposing dry-run inspection of Flink applications.

    The controller graph is wired once at startup so that a bad object-store
    or job-manager configuration fails the process before it serves traffic.
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        settings = get_settings()
        get_flink_controller()
        logger.info(
            "Flink controller ready with '%s' object store; job managers on %s port %d.",
            settings.object_store_backend,
            settings.job_manager_scheme,
            settings.job_manager_port,
        )
        yield

    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


def run() -> None:
    """Serve the reconciler API with uvicorn using `FLINK_RECONCILER_*` settings."""

    settings = get_settings()
    uvicorn.run(
        "flink_reconciler.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=False,
    )


__all__ = ["app", "create_app", "run"]
