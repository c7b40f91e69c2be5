"""Pydantic models mapped from the Flink job-manager REST API."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class FlinkJobStatus(StrEnum):
    """Job status as reported by `/jobs`."""

    UNKNOWN = ""
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    FAILING = "FAILING"
    FAILED = "FAILED"
    CANCELLING = "CANCELLING"
    CANCELED = "CANCELED"
    FINISHED = "FINISHED"

    @classmethod
    def _missing_(cls, value: object) -> FlinkJobStatus:
        return cls.UNKNOWN

    @property
    def is_active(self) -> bool:
        return self in ACTIVE_JOB_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_JOB_STATUSES

    @property
    def is_transitional(self) -> bool:
        return self in TRANSITIONAL_JOB_STATUSES


class SavepointStatus(StrEnum):
    """Savepoint trigger status; failures surface through `failure-cause`."""

    INVALID = ""
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def _missing_(cls, value: object) -> SavepointStatus:
        return cls.INVALID

    @property
    def is_terminal(self) -> bool:
        return self is SavepointStatus.COMPLETED


class CheckpointStatus(StrEnum):
    """Checkpoint status inside checkpoint statistics."""

    UNKNOWN = ""
    IN_PROGRESS = "IN_PROGRESS"
    FAILED = "FAILED"
    COMPLETED = "COMPLETED"

    @classmethod
    def _missing_(cls, value: object) -> CheckpointStatus:
        return cls.UNKNOWN


ACTIVE_JOB_STATUSES = frozenset({FlinkJobStatus.CREATED, FlinkJobStatus.RUNNING})
TERMINAL_JOB_STATUSES = frozenset(
    {FlinkJobStatus.FAILED, FlinkJobStatus.CANCELED, FlinkJobStatus.FINISHED}
)
TRANSITIONAL_JOB_STATUSES = frozenset({FlinkJobStatus.FAILING, FlinkJobStatus.CANCELLING})


def _lenient_enum(enum_type: type[StrEnum]) -> BeforeValidator:
    """Route null and unrecognized values to the enum's unset member."""

    def parse(value: object) -> object:
        if value is None:
            return enum_type("")
        return enum_type(value)

    return BeforeValidator(parse)


JobStatusField = Annotated[FlinkJobStatus, _lenient_enum(FlinkJobStatus)]
SavepointStatusField = Annotated[SavepointStatus, _lenient_enum(SavepointStatus)]
CheckpointStatusField = Annotated[CheckpointStatus, _lenient_enum(CheckpointStatus)]


class JobManagerResponseModel(BaseModel):
    """Base model for payloads returned by the job manager."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class JobManagerRequestModel(BaseModel):
    """Base model for payloads sent to the job manager."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class CancelJobRequest(JobManagerRequestModel):
    """Body of `POST /jobs/{jobId}/savepoints`."""

    cancel_job: bool = Field(default=True, alias="cancel-job")
    target_directory: str | None = Field(default=None, alias="target-directory")


class SubmitJobRequest(JobManagerRequestModel):
    """Body of `POST /jars/{jarId}/run`."""

    savepoint_path: str | None = Field(default=None, alias="savepointPath")
    parallelism: int
    program_args: str | None = Field(default=None, alias="programArgs")
    entry_class: str | None = Field(default=None, alias="entryClass")


class CancelJobResponse(JobManagerResponseModel):
    """Trigger handle for an asynchronous savepoint operation."""

    trigger_id: str = Field(alias="request-id")


class SubmitJobResponse(JobManagerResponseModel):
    """Job id assigned by a jar run."""

    job_id: str = Field(default="", alias="jobid")


class FailureCause(JobManagerResponseModel):
    """Serialized exception reported for a failed async operation."""

    class_name: str = Field(default="", alias="class")
    stack_trace: str = Field(default="", alias="stack-trace")


class SavepointOperation(JobManagerResponseModel):
    """Outcome detail of a savepoint operation."""

    location: str | None = None
    failure_cause: FailureCause | None = Field(default=None, alias="failure-cause")


class SavepointStatusDetail(JobManagerResponseModel):
    """Wrapper object carrying the savepoint status id."""

    status: SavepointStatusField = Field(default=SavepointStatus.INVALID, alias="id")


class SavepointResponse(JobManagerResponseModel):
    """Response of `GET /jobs/{jobId}/savepoints/{triggerId}`."""

    savepoint_status: SavepointStatusDetail | None = Field(default=None, alias="status")
    operation: SavepointOperation | None = None

    @property
    def status(self) -> SavepointStatus:
        if self.savepoint_status is None:
            return SavepointStatus.INVALID
        return self.savepoint_status.status

    @property
    def location(self) -> str | None:
        if self.operation is None:
            return None
        return self.operation.location

    @property
    def failure_cause(self) -> FailureCause | None:
        if self.operation is None:
            return None
        return self.operation.failure_cause

    @property
    def is_completed(self) -> bool:
        return self.status is SavepointStatus.COMPLETED

    @property
    def has_failed(self) -> bool:
        return self.failure_cause is not None


class FlinkJob(JobManagerResponseModel):
    """One entry of the job listing."""

    job_id: str = Field(alias="id")
    status: JobStatusField = FlinkJobStatus.UNKNOWN


class GetJobsResponse(JobManagerResponseModel):
    """Response of `GET /jobs`; order is preserved as returned."""

    jobs: list[FlinkJob] = Field(default_factory=list)


class JobExecutionConfig(JobManagerResponseModel):
    """Execution settings of a job."""

    parallelism: int = Field(alias="job-parallelism")


class JobConfigResponse(JobManagerResponseModel):
    """Response of `GET /jobs/{jobId}/config`."""

    job_id: str = Field(alias="jid")
    execution_config: JobExecutionConfig = Field(alias="execution-config")


class ClusterOverviewResponse(JobManagerResponseModel):
    """Response of `GET /overview`."""

    task_manager_count: int = Field(default=0, alias="taskmanagers")
    slots_available: int = Field(default=0, alias="slots-available")


class CheckpointStatistics(JobManagerResponseModel):
    """Statistics of a single checkpoint or savepoint."""

    id: int
    status: CheckpointStatusField = CheckpointStatus.UNKNOWN
    is_savepoint: bool = False
    trigger_timestamp: int = 0
    latest_ack_timestamp: int = 0
    state_size: int = 0
    end_to_end_duration: int = 0
    alignment_buffered: int = 0
    num_subtasks: int = 0
    failure_timestamp: int | None = None
    failure_message: str | None = None
    external_path: str | None = None
    discarded: bool = False


class LatestCheckpoints(JobManagerResponseModel):
    """Most recent checkpoint per kind."""

    completed: CheckpointStatistics | None = None
    savepoint: CheckpointStatistics | None = None
    failed: CheckpointStatistics | None = None
    restored: CheckpointStatistics | None = None


class CheckpointResponse(JobManagerResponseModel):
    """Response of `GET /jobs/{jobId}/checkpoints`."""

    counts: dict[str, int] = Field(default_factory=dict)
    latest: LatestCheckpoints | None = None
    history: list[CheckpointStatistics] = Field(default_factory=list)


__all__ = [
    "ACTIVE_JOB_STATUSES",
    "CancelJobRequest",
    "CancelJobResponse",
    "CheckpointResponse",
    "CheckpointStatistics",
    "CheckpointStatus",
    "ClusterOverviewResponse",
    "FailureCause",
    "FlinkJob",
    "FlinkJobStatus",
    "GetJobsResponse",
    "JobConfigResponse",
    "JobExecutionConfig",
    "LatestCheckpoints",
    "SavepointOperation",
    "SavepointResponse",
    "SavepointStatus",
    "SavepointStatusDetail",
    "SubmitJobRequest",
    "SubmitJobResponse",
    "TERMINAL_JOB_STATUSES",
    "TRANSITIONAL_JOB_STATUSES",
]
