"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/solver", status_code=status.HTTP_200_OK)
def health_solver() -> dict:
    """Report the solver policies the service runs with."""
    return {
        "solver": "clarke-wright",
        "cursor_policy": settings.builder_cursor_policy,
        "capacity_check": settings.merge_capacity_check,
        "max_locations_per_run": settings.max_locations_per_run,
    }
