"""Kubernetes API-server adapters."""

from flink_reconciler.infrastructure.kubernetes.object_store import (
    KubernetesClientError,
    KubernetesObjectStore,
    label_selector,
)

__all__ = ["KubernetesClientError", "KubernetesObjectStore", "label_selector"]
