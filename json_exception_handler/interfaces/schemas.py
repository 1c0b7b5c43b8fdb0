"""
Pydantic schemas for the service's own endpoints.

The error document itself is defined in domain.models.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    stack_traces_enabled: bool
