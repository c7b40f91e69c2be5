"""Job-manager REST adapters."""

from flink_reconciler.infrastructure.job_manager.client import (
    DEFAULT_JOB_MANAGER_PORT,
    FlinkJobManagerClient,
    JobManagerClientError,
)

__all__ = ["DEFAULT_JOB_MANAGER_PORT", "FlinkJobManagerClient", "JobManagerClientError"]
