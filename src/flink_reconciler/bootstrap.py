"""Application bootstrap/wiring."""

import logging

from flink_reconciler.application.services import FlinkController
from flink_reconciler.config import ObjectStoreBackend, Settings
from flink_reconciler.domain.ports import (
    ClusterObjectStore,
    JobManagerProvisioner,
    TaskManagerProvisioner,
)
from flink_reconciler.infrastructure.job_manager import FlinkJobManagerClient
from flink_reconciler.infrastructure.kubernetes import KubernetesObjectStore
from flink_reconciler.infrastructure.object_store import InMemoryClusterObjectStore
from flink_reconciler.infrastructure.provisioners import (
    NoopJobManagerProvisioner,
    NoopTaskManagerProvisioner,
)

logger = logging.getLogger(__name__)


def _build_object_store(settings: Settings) -> ClusterObjectStore:
    if settings.object_store_backend == ObjectStoreBackend.KUBERNETES:
        if settings.kubernetes_api_url is None:
            raise ValueError(
                "FLINK_RECONCILER_KUBERNETES_API_URL is required when "
                "FLINK_RECONCILER_OBJECT_STORE_BACKEND=kubernetes."
            )
        return KubernetesObjectStore(
            api_url=settings.kubernetes_api_url,
            token=settings.kubernetes_token,
            verify_tls=settings.kubernetes_verify_tls,
            timeout_seconds=settings.kubernetes_timeout_seconds,
        )
    logger.warning(
        "Using the in-memory object store; cluster state will not reflect a real platform."
    )
    return InMemoryClusterObjectStore()


def build_flink_controller(
    settings: Settings,
    *,
    job_manager_provisioner: JobManagerProvisioner | None = None,
    task_manager_provisioner: TaskManagerProvisioner | None = None,
) -> FlinkController:
    """Compose the controller graph."""

    return FlinkController(
        object_store=_build_object_store(settings),
        job_manager_provisioner=job_manager_provisioner or NoopJobManagerProvisioner(),
        task_manager_provisioner=task_manager_provisioner or NoopTaskManagerProvisioner(),
        job_manager_api=FlinkJobManagerClient(
            scheme=settings.job_manager_scheme,
            port=settings.job_manager_port,
            timeout_seconds=settings.job_manager_timeout_seconds,
        ),
    )


__all__ = ["build_flink_controller"]
