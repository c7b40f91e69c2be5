"""Dependency providers for FastAPI routes."""

from functools import lru_cache

from flink_reconciler.application.services import FlinkController
from flink_reconciler.bootstrap import build_flink_controller
from flink_reconciler.config import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return singleton settings."""

    return Settings()


@lru_cache(maxsize=1)
def get_flink_controller() -> FlinkController:
    """Return singleton controller graph."""

    return build_flink_controller(get_settings())


__all__ = ["get_flink_controller", "get_settings"]
