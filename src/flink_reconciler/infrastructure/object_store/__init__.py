"""Object store adapter implementations."""

from flink_reconciler.infrastructure.object_store.in_memory_object_store import (
    InMemoryClusterObjectStore,
)

__all__ = ["InMemoryClusterObjectStore"]
