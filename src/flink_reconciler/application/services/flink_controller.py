"""Reconciliation decisions and actions for a Flink application cluster."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from flink_reconciler.domain.application import FlinkApplication
from flink_reconciler.domain.cluster_objects import (
    ClusterObject,
    app_labels,
    find_task_manager,
    image_labels,
    job_manager_service_name,
    partition_by_labels,
)
from flink_reconciler.domain.errors import (
    InvalidJobIdError,
    NoActiveJobError,
    TaskManagerNotFoundError,
)
from flink_reconciler.domain.job_manager_models import (
    CheckpointResponse,
    FlinkJob,
    SavepointResponse,
)
from flink_reconciler.domain.ports import (
    ClusterObjectStore,
    FlinkJobManagerApi,
    JobManagerProvisioner,
    TaskManagerProvisioner,
)

logger = logging.getLogger(__name__)


def get_active_flink_job(jobs: Sequence[FlinkJob]) -> FlinkJob | None:
    """Return the first CREATED or RUNNING job in listing order."""

    for index in range(len(jobs)):
        if jobs[index].status.is_active:
            return jobs[index]
    return None


class FlinkController:
    """Answers drift questions and performs bounded actions for one application.

    The controller keeps no state between calls. Every error raised by a
    collaborator reaches the caller unchanged; retries belong to the outer
    reconcile loop, which must also serialize passes per application.
    """

    def __init__(
        self,
        object_store: ClusterObjectStore,
        job_manager_provisioner: JobManagerProvisioner,
        task_manager_provisioner: TaskManagerProvisioner,
        job_manager_api: FlinkJobManagerApi,
    ) -> None:
        self._object_store = object_store
        self._job_manager_provisioner = job_manager_provisioner
        self._task_manager_provisioner = task_manager_provisioner
        self._job_manager_api = job_manager_api

    async def create_cluster(self, application: FlinkApplication) -> None:
        """Ensure job-manager and then task-manager units exist."""

        await self._job_manager_provisioner.create_if_not_exist(application)
        await self._task_manager_provisioner.create_if_not_exist(application)

    async def delete_old_cluster(
        self,
        application: FlinkApplication,
        delete_front_end: bool,
    ) -> None:
        """Delete objects that belong to a previous image generation."""

        app_objects = await self._list_app_objects(application)
        _, old_objects = partition_by_labels(app_objects, image_labels(application.spec.image))
        to_delete = [obj for obj in old_objects if obj.is_deployment or delete_front_end]
        if not to_delete:
            return
        logger.info(
            "Deleting %d stale object(s) of application '%s/%s': %s",
            len(to_delete),
            application.namespace,
            application.name,
            ", ".join(f"{obj.kind}/{obj.name}" for obj in to_delete),
        )
        await self._object_store.delete_objects(to_delete)

    async def is_cluster_change_needed(self, application: FlinkApplication) -> bool:
        """Return True when no deployment exists for the desired image."""

        current, _ = await self._get_current_and_old_deployments(application)
        return not current

    async def has_application_changed(self, application: FlinkApplication) -> bool:
        """Return True when the running cluster does not match the desired spec."""

        if await self.is_cluster_change_needed(application):
            return True
        return await self._is_cluster_update_needed(application)

    async def check_and_update_task_manager(self, application: FlinkApplication) -> bool:
        """Scale the current task-manager deployment to the desired replica count.

        Returns True when a patch was issued. A patch that reached the platform
        is not reverted if the caller's pass later fails or is cancelled.
        """

        current, _ = await self._get_current_and_old_deployments(application)
        task_manager = find_task_manager(current)
        if task_manager is None:
            raise TaskManagerNotFoundError(
                f"No task-manager deployment found for application "
                f"'{application.namespace}/{application.name}'."
            )
        desired = application.spec.number_task_managers
        if task_manager.replicas == desired:
            return False

        logger.info(
            "Scaling task managers of '%s/%s' from %s to %d.",
            application.namespace,
            application.name,
            task_manager.replicas,
            desired,
        )
        await self._object_store.update_object(
            replace(task_manager, replicas=desired, labels=dict(task_manager.labels))
        )
        return True

    async def is_application_parallelism_different(self, application: FlinkApplication) -> bool:
        """Compare the running job's parallelism with the desired parallelism."""

        job_id = await self._get_job_id_for_application(application)
        job_config = await self._job_manager_api.get_job_config(
            job_manager_service_name(application), job_id
        )
        return job_config.execution_config.parallelism != application.spec.parallelism

    async def is_multiple_cluster_present(self, application: FlinkApplication) -> bool:
        """Return True when current and stale generations coexist."""

        current, old = await self._get_current_and_old_deployments(application)
        return bool(current) and bool(old)

    async def cancel_with_savepoint(self, application: FlinkApplication) -> str:
        """Cancel the active job after a savepoint; return the trigger id."""

        job_id = await self._get_job_id_for_application(application)
        logger.info(
            "Cancelling job '%s' of '%s/%s' with savepoint.",
            job_id,
            application.namespace,
            application.name,
        )
        return await self._job_manager_api.cancel_job_with_savepoint(
            job_manager_service_name(application), job_id
        )

    async def start_flink_job(self, application: FlinkApplication) -> str:
        """Submit the application's jar and return the new job id."""

        spec = application.spec
        savepoint_path = application.status.savepoint_info.savepoint_location or None
        response = await self._job_manager_api.submit_job(
            job_manager_service_name(application),
            spec.jar_name,
            savepoint_path,
            spec.parallelism,
            entry_class=spec.entry_class,
            program_args=spec.program_args,
        )
        if not response.job_id:
            raise InvalidJobIdError("unable to submit job: invalid job id")
        logger.info(
            "Submitted job '%s' for '%s/%s' (savepoint=%s, parallelism=%d).",
            response.job_id,
            application.namespace,
            application.name,
            savepoint_path,
            spec.parallelism,
        )
        return response.job_id

    async def get_savepoint_status(self, application: FlinkApplication) -> SavepointResponse:
        """Poll the savepoint triggered for the active job."""

        job_id = await self._get_job_id_for_application(application)
        return await self._job_manager_api.check_savepoint_status(
            job_manager_service_name(application),
            job_id,
            application.status.savepoint_info.trigger_id,
        )

    async def is_cluster_ready(self, application: FlinkApplication) -> bool:
        """Return True when all pods of the desired image generation are running."""

        return await self._object_store.are_all_pods_running(
            application.namespace, image_labels(application.spec.image)
        )

    async def is_service_ready(self, application: FlinkApplication) -> bool:
        """Return True when the job-manager REST endpoint answers."""

        await self._job_manager_api.get_cluster_overview(job_manager_service_name(application))
        return True

    async def get_jobs_for_application(self, application: FlinkApplication) -> list[FlinkJob]:
        """Return the cluster's job listing as reported."""

        response = await self._job_manager_api.get_jobs(job_manager_service_name(application))
        return response.jobs

    async def get_checkpoints_for_application(
        self, application: FlinkApplication
    ) -> CheckpointResponse:
        """Return checkpoint statistics of the active job."""

        job_id = await self._get_job_id_for_application(application)
        return await self._job_manager_api.get_checkpoint_counts(
            job_manager_service_name(application), job_id
        )

    async def _is_cluster_update_needed(self, application: FlinkApplication) -> bool:
        current, _ = await self._get_current_and_old_deployments(application)
        task_manager = find_task_manager(current)
        replicas = 0 if task_manager is None else task_manager.replicas or 0
        if replicas != application.spec.number_task_managers:
            return True
        return await self.is_application_parallelism_different(application)

    # Assumes a single job per cluster; with several active jobs the first
    # one in listing order wins.
    async def _get_job_id_for_application(self, application: FlinkApplication) -> str:
        if application.status.active_job_id:
            return application.status.active_job_id

        jobs = await self.get_jobs_for_application(application)
        active_job = get_active_flink_job(jobs)
        if active_job is None:
            raise NoActiveJobError(
                f"No active job found for application "
                f"'{application.namespace}/{application.name}': "
                f"{[(job.job_id, str(job.status)) for job in jobs]}"
            )
        logger.warning(
            "Active job id not persisted for '%s/%s'; using job '%s' from the live listing.",
            application.namespace,
            application.name,
            active_job.job_id,
        )
        return active_job.job_id

    async def _list_app_objects(self, application: FlinkApplication) -> list[ClusterObject]:
        return await self._object_store.list_objects_with_labels(
            application.namespace, app_labels(application.name)
        )

    async def _get_current_and_old_deployments(
        self, application: FlinkApplication
    ) -> tuple[list[ClusterObject], list[ClusterObject]]:
        app_objects = await self._list_app_objects(application)
        deployments = [obj for obj in app_objects if obj.is_deployment]
        return partition_by_labels(deployments, image_labels(application.spec.image))


__all__ = ["FlinkController", "get_active_flink_job"]
