"""Top-level API router composition."""

from fastapi import APIRouter

from flink_reconciler.api.routes import health_router, inspection_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(inspection_router)

__all__ = ["api_router"]
