"""Kubernetes API-server adapter for the cluster object store port."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import httpx

from flink_reconciler.domain.cluster_objects import ClusterObject, ObjectKind
from flink_reconciler.domain.ports import ClusterObjectStore

_RUNNING_POD_PHASE = "Running"
_MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"

logger = logging.getLogger(__name__)


class KubernetesClientError(RuntimeError):
    """Raised when API-server calls fail."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def label_selector(labels: Mapping[str, str]) -> str:
    """Render an equality-based label selector."""

    return ",".join(f"{key}={value}" for key, value in sorted(labels.items()))


class KubernetesObjectStore(ClusterObjectStore):
    """Reads and writes deployments, services and pods through the REST API."""

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        verify_tls: bool = True,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = self._normalize_api_url(api_url)
        self._token = token
        self._verify_tls = verify_tls
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def list_objects_with_labels(
        self,
        namespace: str,
        labels: Mapping[str, str],
    ) -> list[ClusterObject]:
        params = {"labelSelector": label_selector(labels)}
        deployments = await self._request(
            "GET", self._collection_path(ObjectKind.DEPLOYMENT, namespace), params=params
        )
        services = await self._request(
            "GET", self._collection_path(ObjectKind.SERVICE, namespace), params=params
        )
        return [
            *(self._to_object(ObjectKind.DEPLOYMENT, item) for item in _items(deployments)),
            *(self._to_object(ObjectKind.SERVICE, item) for item in _items(services)),
        ]

    async def update_object(self, obj: ClusterObject) -> None:
        patch: dict[str, Any] = {"metadata": {"labels": dict(obj.labels)}}
        if obj.kind is ObjectKind.DEPLOYMENT and obj.replicas is not None:
            patch["spec"] = {"replicas": obj.replicas}
        await self._request(
            "PATCH",
            self._object_path(obj),
            content=json.dumps(patch),
            headers={"Content-Type": _MERGE_PATCH_CONTENT_TYPE},
        )

    async def delete_objects(self, objects: Sequence[ClusterObject]) -> None:
        for obj in objects:
            await self._request("DELETE", self._object_path(obj))
            logger.debug("Deleted %s '%s/%s'.", obj.kind, obj.namespace, obj.name)

    async def are_all_pods_running(self, namespace: str, labels: Mapping[str, str]) -> bool:
        payload = await self._request(
            "GET",
            f"/api/v1/namespaces/{_segment(namespace)}/pods",
            params={"labelSelector": label_selector(labels)},
        )
        pods = _items(payload)
        if not pods:
            return False
        return all(
            (pod.get("status") or {}).get("phase") == _RUNNING_POD_PHASE for pod in pods
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        content: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._api_url}{path}"
        request_headers = dict(headers or {})
        if self._token:
            request_headers["Authorization"] = f"Bearer {self._token}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                verify=self._verify_tls,
                transport=self._transport,
            ) as http_client:
                response = await http_client.request(
                    method,
                    url,
                    params=params,
                    content=content,
                    headers=request_headers,
                )
        except httpx.HTTPError as exc:
            raise KubernetesClientError(f"{method} {url} failed: {exc}") from exc

        if not response.is_success:
            raise KubernetesClientError(
                f"{method} {response.request.url} failed: "
                f"{response.status_code} {self._detail_from_response(response)}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise KubernetesClientError(
                f"{method} {url} returned a non-JSON body.", status_code=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise KubernetesClientError(
                f"{method} {url} returned an unexpected body: {payload!r}",
                status_code=response.status_code,
            )
        return payload

    def _detail_from_response(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            text = response.text.strip()
            return text or "<no response body>"

        if isinstance(payload, dict):
            message = payload.get("message")
            if isinstance(message, str):
                return message
        return str(payload)

    def _to_object(self, kind: ObjectKind, item: dict[str, Any]) -> ClusterObject:
        metadata = item.get("metadata") or {}
        spec = item.get("spec") or {}
        replicas = spec.get("replicas") if kind is ObjectKind.DEPLOYMENT else None
        return ClusterObject(
            kind=kind,
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            labels=dict(metadata.get("labels") or {}),
            replicas=replicas,
        )

    def _collection_path(self, kind: ObjectKind, namespace: str) -> str:
        namespace_path = _segment(namespace)
        if kind is ObjectKind.DEPLOYMENT:
            return f"/apis/apps/v1/namespaces/{namespace_path}/deployments"
        return f"/api/v1/namespaces/{namespace_path}/services"

    def _object_path(self, obj: ClusterObject) -> str:
        return f"{self._collection_path(obj.kind, obj.namespace)}/{_segment(obj.name)}"

    def _normalize_api_url(self, api_url: str) -> str:
        normalized = api_url.strip().rstrip("/")
        if not normalized:
            raise KubernetesClientError("Kubernetes API URL cannot be empty.")
        return normalized


def _items(payload: dict[str, Any]) -> list[dict[str, Any]]:
    items = payload.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _segment(value: str) -> str:
    return quote(value, safe="")


__all__ = ["KubernetesClientError", "KubernetesObjectStore", "label_selector"]
