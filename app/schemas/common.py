"""Schemas shared across endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")
