from __future__ import annotations

import pytest

from flink_reconciler.domain.job_manager_models import (
    CancelJobRequest,
    CheckpointResponse,
    CheckpointStatus,
    ClusterOverviewResponse,
    FlinkJobStatus,
    GetJobsResponse,
    JobConfigResponse,
    SavepointResponse,
    SavepointStatus,
    SubmitJobRequest,
)


def _checkpoint(checkpoint_id: int, status: str, **extra: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": checkpoint_id,
        "status": status,
        "is_savepoint": False,
        "trigger_timestamp": 1_700_000_000_000,
        "latest_ack_timestamp": 1_700_000_000_250,
        "state_size": 4096,
        "end_to_end_duration": 250,
        "alignment_buffered": 0,
        "num_subtasks": 8,
        "discarded": False,
    }
    payload.update(extra)
    return payload


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("RUNNING", FlinkJobStatus.RUNNING),
        ("CANCELLING", FlinkJobStatus.CANCELLING),
        ("RESTARTING", FlinkJobStatus.UNKNOWN),
        (None, FlinkJobStatus.UNKNOWN),
    ],
)
def test_job_status_decodes_unknown_values_to_unknown(
    raw: str | None, expected: FlinkJobStatus
) -> None:
    response = GetJobsResponse.model_validate({"jobs": [{"id": "job-1", "status": raw}]})

    assert response.jobs[0].status is expected


def test_job_status_classification_sets_are_disjoint() -> None:
    assert FlinkJobStatus.CREATED.is_active
    assert FlinkJobStatus.RUNNING.is_active
    assert FlinkJobStatus.FAILING.is_transitional
    assert FlinkJobStatus.CANCELLING.is_transitional
    for status in (FlinkJobStatus.FAILED, FlinkJobStatus.CANCELED, FlinkJobStatus.FINISHED):
        assert status.is_terminal
        assert not status.is_active
    assert not FlinkJobStatus.UNKNOWN.is_active
    assert not FlinkJobStatus.UNKNOWN.is_terminal


def test_job_listing_preserves_remote_order() -> None:
    response = GetJobsResponse.model_validate(
        {
            "jobs": [
                {"id": "b", "status": "FINISHED"},
                {"id": "a", "status": "RUNNING"},
                {"id": "c", "status": "CREATED"},
            ]
        }
    )

    assert [job.job_id for job in response.jobs] == ["b", "a", "c"]


def test_savepoint_response_in_progress_without_operation() -> None:
    response = SavepointResponse.model_validate({"status": {"id": "IN_PROGRESS"}})

    assert response.status is SavepointStatus.IN_PROGRESS
    assert response.location is None
    assert response.failure_cause is None
    assert not response.is_completed
    assert response.model_dump(by_alias=True, exclude_none=True) == {
        "status": {"id": "IN_PROGRESS"}
    }


def test_savepoint_response_completed_exposes_location() -> None:
    payload = {
        "status": {"id": "COMPLETED"},
        "operation": {"location": "s3://savepoints/app/savepoint-1"},
    }
    response = SavepointResponse.model_validate(payload)

    assert response.is_completed
    assert response.status.is_terminal
    assert response.location == "s3://savepoints/app/savepoint-1"
    assert response.model_dump(by_alias=True, exclude_none=True) == payload


def test_savepoint_failure_surfaces_cause_without_failed_status() -> None:
    payload = {
        "status": {"id": "COMPLETED"},
        "operation": {
            "failure-cause": {
                "class": "java.util.concurrent.CompletionException",
                "stack-trace": "CompletionException: checkpoint declined",
            }
        },
    }
    response = SavepointResponse.model_validate(payload)

    assert response.has_failed
    assert response.failure_cause is not None
    assert response.failure_cause.class_name == "java.util.concurrent.CompletionException"
    assert response.location is None
    assert response.model_dump(by_alias=True, exclude_none=True) == payload


def test_savepoint_response_without_status_reencodes_without_status() -> None:
    payload = {"operation": {"location": "s3://savepoints/app/savepoint-2"}}

    response = SavepointResponse.model_validate(payload)

    assert response.status is SavepointStatus.INVALID
    assert response.location == "s3://savepoints/app/savepoint-2"
    assert response.model_dump(by_alias=True, exclude_none=True) == payload


def test_savepoint_status_missing_or_unknown_is_invalid() -> None:
    assert SavepointResponse.model_validate({}).status is SavepointStatus.INVALID
    assert (
        SavepointResponse.model_validate({"status": {"id": "FAILED"}}).status
        is SavepointStatus.INVALID
    )


def test_job_config_reads_nested_parallelism_and_ignores_extra_fields() -> None:
    response = JobConfigResponse.model_validate(
        {
            "jid": "job-1",
            "name": "wordcount",
            "execution-config": {"job-parallelism": 4, "execution-mode": "PIPELINED"},
        }
    )

    assert response.job_id == "job-1"
    assert response.execution_config.parallelism == 4
    assert response.model_dump(by_alias=True) == {
        "jid": "job-1",
        "execution-config": {"job-parallelism": 4},
    }


def test_cluster_overview_decodes_counts() -> None:
    response = ClusterOverviewResponse.model_validate(
        {"taskmanagers": 3, "slots-available": 6, "flink-version": "1.18.1"}
    )

    assert response.task_manager_count == 3
    assert response.slots_available == 6


def test_checkpoint_response_keeps_failure_fields_only_for_failed_entries() -> None:
    completed = _checkpoint(7, "COMPLETED", external_path="s3://checkpoints/chk-7")
    failed = _checkpoint(
        8,
        "FAILED",
        failure_timestamp=1_700_000_001_000,
        failure_message="Checkpoint expired before completing.",
    )
    payload = {
        "counts": {"restored": 0, "total": 9, "in_progress": 1, "completed": 7, "failed": 1},
        "latest": {"completed": completed, "failed": failed},
        "history": [failed, completed],
    }

    response = CheckpointResponse.model_validate(payload)

    assert response.counts["completed"] == 7
    assert response.latest is not None
    assert response.latest.savepoint is None
    assert response.latest.restored is None
    assert response.latest.failed is not None
    assert response.latest.failed.status is CheckpointStatus.FAILED
    assert response.latest.failed.failure_message == "Checkpoint expired before completing."
    assert response.latest.completed is not None
    assert response.latest.completed.failure_timestamp is None
    assert [entry.id for entry in response.history] == [8, 7]
    assert response.model_dump(by_alias=True, exclude_none=True) == payload


def test_cancel_request_omits_target_directory_when_absent() -> None:
    assert CancelJobRequest(cancel_job=True).model_dump(by_alias=True, exclude_none=True) == {
        "cancel-job": True
    }
    assert CancelJobRequest(
        cancel_job=True, target_directory="s3://savepoints"
    ).model_dump(by_alias=True, exclude_none=True) == {
        "cancel-job": True,
        "target-directory": "s3://savepoints",
    }


def test_submit_request_uses_wire_names() -> None:
    request = SubmitJobRequest(
        savepoint_path="s3://savepoints/sp-1",
        parallelism=4,
        program_args="--input s3://in",
        entry_class="com.example.WordCount",
    )

    assert request.model_dump(by_alias=True, exclude_none=True) == {
        "savepointPath": "s3://savepoints/sp-1",
        "parallelism": 4,
        "programArgs": "--input s3://in",
        "entryClass": "com.example.WordCount",
    }


def test_checkpoint_response_without_latest_reencodes_without_latest() -> None:
    payload = {"counts": {"total": 0, "completed": 0}, "history": []}

    response = CheckpointResponse.model_validate(payload)

    assert response.latest is None
    assert response.model_dump(by_alias=True, exclude_none=True) == payload
