"""Read-only inspection routes evaluating drift for a posted application."""

from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from flink_reconciler.api.dependencies import get_flink_controller
from flink_reconciler.application.services import FlinkController
from flink_reconciler.domain.application import FlinkApplication
from flink_reconciler.domain.errors import FlinkControllerError
from flink_reconciler.domain.job_manager_models import GetJobsResponse
from flink_reconciler.infrastructure.job_manager import JobManagerClientError
from flink_reconciler.infrastructure.kubernetes import KubernetesClientError

router = APIRouter(prefix="/applications", tags=["application inspection"])


class ApplicationInspectionResponse(BaseModel):
    """Drift snapshot for one application."""

    model_config = ConfigDict(populate_by_name=True)

    cluster_change_needed: bool = Field(alias="clusterChangeNeeded")
    multiple_clusters_present: bool = Field(alias="multipleClustersPresent")
    cluster_ready: bool = Field(alias="clusterReady")


def _raise_http_exception(exc: Exception) -> NoReturn:
    if isinstance(exc, FlinkControllerError):
        raise HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, JobManagerClientError | KubernetesClientError):
        raise HTTPException(status_code=502, detail=str(exc))
    raise HTTPException(status_code=500, detail="Unexpected reconciliation error")


@router.post("/inspect", response_model=ApplicationInspectionResponse, status_code=200)
async def inspect_application(
    application: FlinkApplication,
    controller: FlinkController = Depends(get_flink_controller),
) -> ApplicationInspectionResponse:
    """Evaluate cluster-level drift without mutating anything."""

    try:
        return ApplicationInspectionResponse(
            cluster_change_needed=await controller.is_cluster_change_needed(application),
            multiple_clusters_present=await controller.is_multiple_cluster_present(application),
            cluster_ready=await controller.is_cluster_ready(application),
        )
    except Exception as exc:  # noqa: BLE001
        _raise_http_exception(exc)


@router.post("/jobs", response_model=GetJobsResponse, status_code=200)
async def list_application_jobs(
    application: FlinkApplication,
    controller: FlinkController = Depends(get_flink_controller),
) -> GetJobsResponse:
    """List jobs reported by the application's job manager."""

    try:
        return GetJobsResponse(jobs=await controller.get_jobs_for_application(application))
    except Exception as exc:  # noqa: BLE001
        _raise_http_exception(exc)


__all__ = ["ApplicationInspectionResponse", "router"]
