"""Application services public API."""

from flink_reconciler.application.services.flink_controller import (
    FlinkController,
    get_active_flink_job,
)

__all__ = ["FlinkController", "get_active_flink_job"]
