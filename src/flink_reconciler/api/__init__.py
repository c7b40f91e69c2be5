"""HTTP API layer."""

from flink_reconciler.api.router import api_router

__all__ = ["api_router"]
