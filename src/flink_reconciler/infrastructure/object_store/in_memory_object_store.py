"""In-memory cluster object store for local runs and tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace

from flink_reconciler.domain.cluster_objects import (
    ClusterObject,
    ObjectKind,
    labels_match,
    matches_labels,
)
from flink_reconciler.domain.ports import ClusterObjectStore


@dataclass(slots=True)
class _InMemoryPod:
    namespace: str
    labels: dict[str, str]
    phase: str = "Pending"


@dataclass(slots=True)
class _Mutations:
    updates: list[ClusterObject] = field(default_factory=list)
    deletes: list[ClusterObject] = field(default_factory=list)


class InMemoryClusterObjectStore(ClusterObjectStore):
    """Simple object store keyed by (kind, namespace, name)."""

    def __init__(self, objects: Iterable[ClusterObject] = ()) -> None:
        self._objects: dict[tuple[ObjectKind, str, str], ClusterObject] = {}
        self._pods: list[_InMemoryPod] = []
        self._mutations = _Mutations()
        self._lock = asyncio.Lock()
        for obj in objects:
            self._objects[_key(obj)] = replace(obj, labels=dict(obj.labels))

    @property
    def updates(self) -> list[ClusterObject]:
        """Objects passed to `update_object`, in call order."""

        return list(self._mutations.updates)

    @property
    def deletes(self) -> list[ClusterObject]:
        """Objects passed to `delete_objects`, in call order."""

        return list(self._mutations.deletes)

    def add_pod(self, namespace: str, labels: Mapping[str, str], phase: str = "Running") -> None:
        """Seed a pod used by readiness checks."""

        self._pods.append(_InMemoryPod(namespace=namespace, labels=dict(labels), phase=phase))

    def get(self, kind: ObjectKind, namespace: str, name: str) -> ClusterObject | None:
        return self._objects.get((kind, namespace, name))

    async def list_objects_with_labels(
        self,
        namespace: str,
        labels: Mapping[str, str],
    ) -> list[ClusterObject]:
        async with self._lock:
            return [
                replace(obj, labels=dict(obj.labels))
                for obj in self._objects.values()
                if obj.namespace == namespace and matches_labels(obj, labels)
            ]

    async def update_object(self, obj: ClusterObject) -> None:
        async with self._lock:
            stored = replace(obj, labels=dict(obj.labels))
            self._objects[_key(obj)] = stored
            self._mutations.updates.append(stored)

    async def delete_objects(self, objects: Sequence[ClusterObject]) -> None:
        async with self._lock:
            for obj in objects:
                self._objects.pop(_key(obj), None)
                self._mutations.deletes.append(obj)

    async def are_all_pods_running(self, namespace: str, labels: Mapping[str, str]) -> bool:
        async with self._lock:
            pods = [
                pod
                for pod in self._pods
                if pod.namespace == namespace and labels_match(pod.labels, labels)
            ]
        if not pods:
            return False
        return all(pod.phase == "Running" for pod in pods)


def _key(obj: ClusterObject) -> tuple[ObjectKind, str, str]:
    return (obj.kind, obj.namespace, obj.name)


__all__ = ["InMemoryClusterObjectStore"]
