"""Route modules public API."""

from flink_reconciler.api.routes.health import router as health_router
from flink_reconciler.api.routes.inspection import router as inspection_router

__all__ = ["health_router", "inspection_router"]
