"""Pydantic schema for the status endpoint."""

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    """Response body for GET /status."""

    ok: bool = Field(default=True, description="Service is up")
    service: str = Field(description="Service name")
