"""Domain public API."""

from flink_reconciler.domain.application import (
    FlinkApplication,
    FlinkApplicationSpec,
    FlinkApplicationStatus,
    ObjectMeta,
    SavepointInfo,
)
from flink_reconciler.domain.cluster_objects import (
    ClusterObject,
    ObjectKind,
    partition_by_labels,
)
from flink_reconciler.domain.errors import (
    FlinkControllerError,
    InvalidJobIdError,
    NoActiveJobError,
    TaskManagerNotFoundError,
)
from flink_reconciler.domain.job_manager_models import (
    CancelJobRequest,
    CancelJobResponse,
    CheckpointResponse,
    CheckpointStatistics,
    CheckpointStatus,
    ClusterOverviewResponse,
    FailureCause,
    FlinkJob,
    FlinkJobStatus,
    GetJobsResponse,
    JobConfigResponse,
    SavepointResponse,
    SavepointStatus,
    SubmitJobRequest,
    SubmitJobResponse,
)
from flink_reconciler.domain.ports import (
    ClusterObjectStore,
    FlinkJobManagerApi,
    JobManagerProvisioner,
    TaskManagerProvisioner,
)

__all__ = [
    "CancelJobRequest",
    "CancelJobResponse",
    "CheckpointResponse",
    "CheckpointStatistics",
    "CheckpointStatus",
    "ClusterObject",
    "ClusterObjectStore",
    "ClusterOverviewResponse",
    "FailureCause",
    "FlinkApplication",
    "FlinkApplicationSpec",
    "FlinkApplicationStatus",
    "FlinkControllerError",
    "FlinkJob",
    "FlinkJobManagerApi",
    "FlinkJobStatus",
    "GetJobsResponse",
    "InvalidJobIdError",
    "JobConfigResponse",
    "JobManagerProvisioner",
    "NoActiveJobError",
    "ObjectKind",
    "ObjectMeta",
    "SavepointInfo",
    "SavepointResponse",
    "SavepointStatus",
    "SubmitJobRequest",
    "SubmitJobResponse",
    "TaskManagerNotFoundError",
    "TaskManagerProvisioner",
    "partition_by_labels",
]
