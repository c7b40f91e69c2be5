"""Liveness route for the reconciler API."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    """Report that the reconciler API process is serving requests."""

    return {"status": "ok"}


__all__ = ["router"]
