from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from flink_reconciler.domain.job_manager_models import FlinkJobStatus, SavepointStatus
from flink_reconciler.infrastructure.job_manager import (
    FlinkJobManagerClient,
    JobManagerClientError,
)


def _client(
    handler: object,
    requests: list[httpx.Request] | None = None,
) -> FlinkJobManagerClient:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)  # type: ignore[operator]

    return FlinkJobManagerClient(transport=httpx.MockTransport(recording_handler))


def test_get_jobs_calls_jobs_endpoint_on_service_address() -> None:
    requests: list[httpx.Request] = []
    client = _client(
        lambda _: httpx.Response(
            200, json={"jobs": [{"id": "job-1", "status": "RUNNING"}]}
        ),
        requests,
    )

    response = asyncio.run(client.get_jobs("wordcount.flink"))

    assert str(requests[0].url) == "http://wordcount.flink:8081/jobs"
    assert requests[0].method == "GET"
    assert response.jobs[0].job_id == "job-1"
    assert response.jobs[0].status is FlinkJobStatus.RUNNING


def test_get_job_config_returns_parallelism() -> None:
    requests: list[httpx.Request] = []
    client = _client(
        lambda _: httpx.Response(
            200, json={"jid": "job-1", "execution-config": {"job-parallelism": 3}}
        ),
        requests,
    )

    response = asyncio.run(client.get_job_config("wordcount.flink", "job-1"))

    assert str(requests[0].url) == "http://wordcount.flink:8081/jobs/job-1/config"
    assert response.execution_config.parallelism == 3


def test_submit_job_posts_run_request_and_omits_missing_savepoint() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _: httpx.Response(200, json={"jobid": "job-9"}), requests)

    response = asyncio.run(
        client.submit_job(
            "wordcount.flink",
            "wordcount.jar",
            None,
            4,
            entry_class="com.example.WordCount",
        )
    )

    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "http://wordcount.flink:8081/jars/wordcount.jar/run"
    assert json.loads(request.content.decode()) == {
        "parallelism": 4,
        "entryClass": "com.example.WordCount",
    }
    assert response.job_id == "job-9"


def test_submit_job_with_empty_body_yields_empty_job_id() -> None:
    client = _client(lambda _: httpx.Response(200, json={}))

    response = asyncio.run(client.submit_job("wordcount.flink", "wordcount.jar", None, 1))

    assert response.job_id == ""


def test_cancel_job_with_savepoint_returns_trigger_id() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda _: httpx.Response(202, json={"request-id": "trg-1"}), requests)

    trigger_id = asyncio.run(
        client.cancel_job_with_savepoint(
            "wordcount.flink", "job-1", target_directory="s3://savepoints"
        )
    )

    assert trigger_id == "trg-1"
    assert str(requests[0].url) == "http://wordcount.flink:8081/jobs/job-1/savepoints"
    assert json.loads(requests[0].content.decode()) == {
        "cancel-job": True,
        "target-directory": "s3://savepoints",
    }


def test_check_savepoint_status_decodes_operation() -> None:
    requests: list[httpx.Request] = []
    client = _client(
        lambda _: httpx.Response(
            200,
            json={"status": {"id": "COMPLETED"}, "operation": {"location": "s3://sp/1"}},
        ),
        requests,
    )

    response = asyncio.run(client.check_savepoint_status("wordcount.flink", "job-1", "trg-1"))

    assert str(requests[0].url) == "http://wordcount.flink:8081/jobs/job-1/savepoints/trg-1"
    assert response.status is SavepointStatus.COMPLETED
    assert response.location == "s3://sp/1"


def test_get_cluster_overview_and_checkpoints() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/overview":
            return httpx.Response(200, json={"taskmanagers": 2, "slots-available": 4})
        return httpx.Response(200, json={"counts": {"completed": 1}, "latest": {}, "history": []})

    client = _client(handler)

    overview = asyncio.run(client.get_cluster_overview("wordcount.flink"))
    checkpoints = asyncio.run(client.get_checkpoint_counts("wordcount.flink", "job-1"))

    assert overview.task_manager_count == 2
    assert checkpoints.counts == {"completed": 1}
    assert checkpoints.latest is not None
    assert checkpoints.latest.completed is None


def test_non_success_status_raises_descriptive_error() -> None:
    client = _client(lambda _: httpx.Response(404, json={"errors": ["Job could not be found."]}))

    with pytest.raises(JobManagerClientError, match="404 Job could not be found.") as exc_info:
        asyncio.run(client.get_job_config("wordcount.flink", "missing"))

    assert exc_info.value.status_code == 404


def test_transport_failure_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(JobManagerClientError, match="GET http://wordcount.flink:8081/overview"):
        asyncio.run(client.get_cluster_overview("wordcount.flink"))


def test_malformed_body_raises_client_error() -> None:
    client = _client(lambda _: httpx.Response(200, text="<html>proxy error</html>"))

    with pytest.raises(JobManagerClientError, match="unexpected body"):
        asyncio.run(client.get_jobs("wordcount.flink"))


def test_scheme_and_port_are_configurable() -> None:
    client = FlinkJobManagerClient(scheme="https", port=443)

    assert client.base_url("wordcount.flink") == "https://wordcount.flink:443"
    with pytest.raises(JobManagerClientError):
        client.base_url("  ")
