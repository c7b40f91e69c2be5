"""Desired-state model of a Flink application custom resource."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ApplicationModel(BaseModel):
    """Base model for custom resource fragments."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(ApplicationModel):
    """Identity of the application resource."""

    name: str
    namespace: str = "default"


class FlinkApplicationSpec(ApplicationModel):
    """Operator-authored desired state."""

    image: str
    number_task_managers: int = Field(ge=1, alias="numberTaskManagers")
    parallelism: int = Field(ge=1)
    jar_name: str = Field(alias="jarName")
    entry_class: str | None = Field(default=None, alias="entryClass")
    program_args: str | None = Field(default=None, alias="programArgs")


class SavepointInfo(ApplicationModel):
    """Savepoint bookkeeping persisted by the caller between passes."""

    trigger_id: str = Field(default="", alias="triggerId")
    savepoint_location: str = Field(default="", alias="savepointLocation")


class FlinkApplicationStatus(ApplicationModel):
    """Observed state persisted by the caller."""

    active_job_id: str = Field(default="", alias="activeJobId")
    savepoint_info: SavepointInfo = Field(default_factory=SavepointInfo, alias="savepointInfo")


class FlinkApplication(ApplicationModel):
    """Desired application handed to the controller for one reconciliation pass."""

    metadata: ObjectMeta
    spec: FlinkApplicationSpec
    status: FlinkApplicationStatus = Field(default_factory=FlinkApplicationStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace


__all__ = [
    "FlinkApplication",
    "FlinkApplicationSpec",
    "FlinkApplicationStatus",
    "ObjectMeta",
    "SavepointInfo",
]
