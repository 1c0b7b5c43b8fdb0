"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
Reports the version and whether error responses disclose stack traces.
"""

from fastapi import APIRouter

from json_exception_handler.core.config import settings
from json_exception_handler.interfaces.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status, version and trace disclosure.",
)
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        stack_traces_enabled=settings.show_stack_trace,
    )
