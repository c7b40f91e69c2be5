"""HTTP client for the Flink job-manager REST API."""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from flink_reconciler.domain.job_manager_models import (
    CancelJobRequest,
    CancelJobResponse,
    CheckpointResponse,
    ClusterOverviewResponse,
    GetJobsResponse,
    JobConfigResponse,
    SavepointResponse,
    SubmitJobRequest,
    SubmitJobResponse,
)
from flink_reconciler.domain.ports import FlinkJobManagerApi

DEFAULT_JOB_MANAGER_PORT = 8081

_ResponseModelT = TypeVar("_ResponseModelT", bound=BaseModel)


class JobManagerClientError(RuntimeError):
    """Raised when job-manager calls fail."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FlinkJobManagerClient(FlinkJobManagerApi):
    """Async wrapper around job-manager endpoints, addressed per service name."""

    def __init__(
        self,
        scheme: str = "http",
        port: int = DEFAULT_JOB_MANAGER_PORT,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._scheme = scheme
        self._port = port
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def get_jobs(self, service_name: str) -> GetJobsResponse:
        """Call `GET /jobs`."""

        return await self._request(service_name, "GET", "/jobs", GetJobsResponse)

    async def get_job_config(self, service_name: str, job_id: str) -> JobConfigResponse:
        """Call `GET /jobs/{jobId}/config`."""

        return await self._request(
            service_name, "GET", f"/jobs/{_segment(job_id)}/config", JobConfigResponse
        )

    async def submit_job(
        self,
        service_name: str,
        jar_name: str,
        savepoint_path: str | None,
        parallelism: int,
        *,
        entry_class: str | None = None,
        program_args: str | None = None,
    ) -> SubmitJobResponse:
        """Call `POST /jars/{jarId}/run`."""

        body = SubmitJobRequest(
            savepoint_path=savepoint_path,
            parallelism=parallelism,
            entry_class=entry_class,
            program_args=program_args,
        )
        return await self._request(
            service_name,
            "POST",
            f"/jars/{_segment(jar_name)}/run",
            SubmitJobResponse,
            payload=body.model_dump(by_alias=True, exclude_none=True),
        )

    async def cancel_job_with_savepoint(
        self,
        service_name: str,
        job_id: str,
        target_directory: str | None = None,
    ) -> str:
        """Call `POST /jobs/{jobId}/savepoints` with `cancel-job` set."""

        body = CancelJobRequest(cancel_job=True, target_directory=target_directory)
        response = await self._request(
            service_name,
            "POST",
            f"/jobs/{_segment(job_id)}/savepoints",
            CancelJobResponse,
            payload=body.model_dump(by_alias=True, exclude_none=True),
        )
        return response.trigger_id

    async def check_savepoint_status(
        self,
        service_name: str,
        job_id: str,
        trigger_id: str,
    ) -> SavepointResponse:
        """Call `GET /jobs/{jobId}/savepoints/{triggerId}`."""

        return await self._request(
            service_name,
            "GET",
            f"/jobs/{_segment(job_id)}/savepoints/{_segment(trigger_id)}",
            SavepointResponse,
        )

    async def get_cluster_overview(self, service_name: str) -> ClusterOverviewResponse:
        """Call `GET /overview`."""

        return await self._request(service_name, "GET", "/overview", ClusterOverviewResponse)

    async def get_checkpoint_counts(self, service_name: str, job_id: str) -> CheckpointResponse:
        """Call `GET /jobs/{jobId}/checkpoints`."""

        return await self._request(
            service_name, "GET", f"/jobs/{_segment(job_id)}/checkpoints", CheckpointResponse
        )

    def base_url(self, service_name: str) -> str:
        normalized = service_name.strip()
        if not normalized:
            raise JobManagerClientError("Job-manager service name cannot be empty.")
        return f"{self._scheme}://{normalized}:{self._port}"

    async def _request(
        self,
        service_name: str,
        method: str,
        path: str,
        response_model: type[_ResponseModelT],
        payload: dict[str, Any] | None = None,
    ) -> _ResponseModelT:
        url = f"{self.base_url(service_name)}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as http_client:
                response = await http_client.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            raise JobManagerClientError(f"{method} {url} failed: {exc}") from exc
        self._ensure_success(response)

        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise JobManagerClientError(
                f"{method} {url} returned an unexpected body: {exc}",
                status_code=response.status_code,
            ) from exc

    def _ensure_success(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = self._detail_from_response(response)
        raise JobManagerClientError(
            f"{response.request.method} {response.request.url} failed: "
            f"{response.status_code} {message}",
            status_code=response.status_code,
        )

    def _detail_from_response(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            text = response.text.strip()
            return text or "<no response body>"

        if isinstance(payload, dict):
            errors = payload.get("errors")
            if isinstance(errors, list) and errors:
                return "; ".join(str(error) for error in errors)
            detail = payload.get("detail")
            if isinstance(detail, str):
                return detail
        return str(payload)


def _segment(value: str) -> str:
    return quote(value, safe="")


__all__ = ["DEFAULT_JOB_MANAGER_PORT", "FlinkJobManagerClient", "JobManagerClientError"]
