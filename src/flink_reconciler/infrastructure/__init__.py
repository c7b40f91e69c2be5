"""Infrastructure layer public API."""

from flink_reconciler.infrastructure.job_manager import (
    FlinkJobManagerClient,
    JobManagerClientError,
)
from flink_reconciler.infrastructure.kubernetes import (
    KubernetesClientError,
    KubernetesObjectStore,
)
from flink_reconciler.infrastructure.object_store import InMemoryClusterObjectStore
from flink_reconciler.infrastructure.provisioners import (
    NoopJobManagerProvisioner,
    NoopTaskManagerProvisioner,
)

__all__ = [
    "FlinkJobManagerClient",
    "InMemoryClusterObjectStore",
    "JobManagerClientError",
    "KubernetesClientError",
    "KubernetesObjectStore",
    "NoopJobManagerProvisioner",
    "NoopTaskManagerProvisioner",
]
