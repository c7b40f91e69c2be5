"""No-op provisioners for deployments whose manifests are applied elsewhere."""

import logging

from flink_reconciler.domain.application import FlinkApplication
from flink_reconciler.domain.ports import JobManagerProvisioner, TaskManagerProvisioner

logger = logging.getLogger(__name__)


class NoopJobManagerProvisioner(JobManagerProvisioner):
    """Placeholder job-manager provisioner; objects are created out of band."""

    async def create_if_not_exist(self, application: FlinkApplication) -> None:
        logger.debug(
            "Skipping job-manager provisioning for '%s/%s'.",
            application.namespace,
            application.name,
        )


class NoopTaskManagerProvisioner(TaskManagerProvisioner):
    """Placeholder task-manager provisioner; objects are created out of band."""

    async def create_if_not_exist(self, application: FlinkApplication) -> None:
        logger.debug(
            "Skipping task-manager provisioning for '%s/%s'.",
            application.namespace,
            application.name,
        )


__all__ = ["NoopJobManagerProvisioner", "NoopTaskManagerProvisioner"]
