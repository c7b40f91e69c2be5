"""Cluster object model and label-based generation partitioning."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from flink_reconciler.domain.application import FlinkApplication

APP_LABEL_KEY = "flink-app"
IMAGE_LABEL_KEY = "flink-app-image"
DEPLOYMENT_TYPE_LABEL_KEY = "flink-deployment-type"
JOB_MANAGER_DEPLOYMENT_TYPE = "jobmanager"
TASK_MANAGER_DEPLOYMENT_TYPE = "taskmanager"

_IMAGE_KEY_LENGTH = 16


class ObjectKind(StrEnum):
    """Kinds of platform objects the controller inspects."""

    DEPLOYMENT = "Deployment"
    SERVICE = "Service"


@dataclass(slots=True)
class ClusterObject:
    """Minimal view of a labeled platform object."""

    kind: ObjectKind
    name: str
    namespace: str
    labels: dict[str, str] = field(default_factory=dict)
    replicas: int | None = None

    @property
    def is_deployment(self) -> bool:
        return self.kind is ObjectKind.DEPLOYMENT


def image_key(image: str) -> str:
    """Return a label-safe, deterministic key for a container image reference."""

    return hashlib.sha256(image.encode("utf-8")).hexdigest()[:_IMAGE_KEY_LENGTH]


def app_labels(app_name: str) -> dict[str, str]:
    return {APP_LABEL_KEY: app_name}


def image_labels(image: str) -> dict[str, str]:
    return {IMAGE_LABEL_KEY: image_key(image)}


def labels_match(labels: Mapping[str, str], selector: Mapping[str, str]) -> bool:
    """Return True when every selector label is present with the same value."""

    return all(labels.get(key) == value for key, value in selector.items())


def matches_labels(obj: ClusterObject, labels: Mapping[str, str]) -> bool:
    return labels_match(obj.labels, labels)


def partition_by_labels(
    objects: Iterable[ClusterObject],
    labels: Mapping[str, str],
) -> tuple[list[ClusterObject], list[ClusterObject]]:
    """Split objects into (matching, non-matching), preserving input order."""

    matching: list[ClusterObject] = []
    non_matching: list[ClusterObject] = []
    for obj in objects:
        if matches_labels(obj, labels):
            matching.append(obj)
        else:
            non_matching.append(obj)
    return matching, non_matching


def find_task_manager(objects: Iterable[ClusterObject]) -> ClusterObject | None:
    """Return the first task-manager deployment, if any."""

    for obj in objects:
        if (
            obj.is_deployment
            and obj.labels.get(DEPLOYMENT_TYPE_LABEL_KEY) == TASK_MANAGER_DEPLOYMENT_TYPE
        ):
            return obj
    return None


def job_manager_service_name(application: FlinkApplication) -> str:
    """Network identity of the application's job-manager service."""

    return f"{application.name}.{application.namespace}"


__all__ = [
    "APP_LABEL_KEY",
    "ClusterObject",
    "DEPLOYMENT_TYPE_LABEL_KEY",
    "IMAGE_LABEL_KEY",
    "JOB_MANAGER_DEPLOYMENT_TYPE",
    "ObjectKind",
    "TASK_MANAGER_DEPLOYMENT_TYPE",
    "app_labels",
    "find_task_manager",
    "image_key",
    "image_labels",
    "job_manager_service_name",
    "labels_match",
    "matches_labels",
    "partition_by_labels",
]
