"""Domain exceptions raised by the reconciliation engine."""


class FlinkControllerError(Exception):
    """Base class for logical errors raised by the controller itself."""


class NoActiveJobError(FlinkControllerError):
    """Raised when no active job can be resolved for an application."""


class InvalidJobIdError(FlinkControllerError):
    """Raised when a job submission succeeds but returns an empty job id."""


class TaskManagerNotFoundError(FlinkControllerError):
    """Raised when the current cluster generation has no task-manager deployment."""


__all__ = [
    "FlinkControllerError",
    "InvalidJobIdError",
    "NoActiveJobError",
    "TaskManagerNotFoundError",
]
