"""Liveness endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_app_settings
from app.core.config import Settings
from app.schemas.status import StatusResponse

router = APIRouter()


@router.get("", response_model=StatusResponse)
def get_status(settings: Annotated[Settings, Depends(get_app_settings)]) -> StatusResponse:
    """Return `{ok: true, service}`. Used by load balancers and monitoring."""
    return StatusResponse(ok=True, service=settings.SERVICE_NAME)
