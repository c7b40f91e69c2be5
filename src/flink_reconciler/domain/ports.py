"""Capability ports injected into the reconciliation engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from flink_reconciler.domain.application import FlinkApplication
from flink_reconciler.domain.cluster_objects import ClusterObject
from flink_reconciler.domain.job_manager_models import (
    CheckpointResponse,
    ClusterOverviewResponse,
    GetJobsResponse,
    JobConfigResponse,
    SavepointResponse,
    SubmitJobResponse,
)


class ClusterObjectStore(Protocol):
    """Container-platform object access."""

    async def list_objects_with_labels(
        self,
        namespace: str,
        labels: Mapping[str, str],
    ) -> list[ClusterObject]:
        """Return deployments and services carrying all given labels."""

    async def update_object(self, obj: ClusterObject) -> None:
        """Apply the object's labels and replica count to the platform."""

    async def delete_objects(self, objects: Sequence[ClusterObject]) -> None:
        """Delete the given objects."""

    async def are_all_pods_running(self, namespace: str, labels: Mapping[str, str]) -> bool:
        """Return True when every pod matching the labels is running."""


class JobManagerProvisioner(Protocol):
    """Ensures the job-manager deployable unit exists."""

    async def create_if_not_exist(self, application: FlinkApplication) -> None:
        """Create job-manager objects when missing; idempotent."""


class TaskManagerProvisioner(Protocol):
    """Ensures the task-manager deployable unit exists."""

    async def create_if_not_exist(self, application: FlinkApplication) -> None:
        """Create task-manager objects when missing; idempotent."""


class FlinkJobManagerApi(Protocol):
    """Job-manager REST capability addressed by service name."""

    async def get_jobs(self, service_name: str) -> GetJobsResponse:
        """List jobs known to the cluster."""

    async def get_job_config(self, service_name: str, job_id: str) -> JobConfigResponse:
        """Return the configuration of one job."""

    async def submit_job(
        self,
        service_name: str,
        jar_name: str,
        savepoint_path: str | None,
        parallelism: int,
        *,
        entry_class: str | None = None,
        program_args: str | None = None,
    ) -> SubmitJobResponse:
        """Run an uploaded jar, optionally restoring from a savepoint."""

    async def cancel_job_with_savepoint(
        self,
        service_name: str,
        job_id: str,
        target_directory: str | None = None,
    ) -> str:
        """Trigger savepoint-and-cancel; return the trigger id."""

    async def check_savepoint_status(
        self,
        service_name: str,
        job_id: str,
        trigger_id: str,
    ) -> SavepointResponse:
        """Poll an asynchronous savepoint operation."""

    async def get_cluster_overview(self, service_name: str) -> ClusterOverviewResponse:
        """Return task-manager and slot counts."""

    async def get_checkpoint_counts(self, service_name: str, job_id: str) -> CheckpointResponse:
        """Return checkpoint counts, latest checkpoints and history."""


__all__ = [
    "ClusterObjectStore",
    "FlinkJobManagerApi",
    "JobManagerProvisioner",
    "TaskManagerProvisioner",
]
