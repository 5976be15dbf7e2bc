"""Director endpoints. Reads are public; writes are admin only."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.core.security import Identity
from app.schemas.common import ErrorResponse
from app.schemas.director import (
    DirectorDeleteResponse,
    DirectorResponse,
    DirectorWriteRequest,
)
from app.services import directors as director_service

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}
ADMIN_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.get("", response_model=list[DirectorResponse])
def list_directors(db: Annotated[Session, Depends(get_db)]) -> list[DirectorResponse]:
    return [DirectorResponse.model_validate(d) for d in director_service.list_directors(db)]


@router.get("/{director_id}", response_model=DirectorResponse, responses=NOT_FOUND)
def get_director(director_id: int, db: Annotated[Session, Depends(get_db)]) -> DirectorResponse:
    return DirectorResponse.model_validate(director_service.get_director(db, director_id))


@router.post(
    "",
    response_model=DirectorResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ADMIN_ERRORS,
)
def create_director(
    body: DirectorWriteRequest,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[Identity, Depends(require_admin)],
) -> DirectorResponse:
    """Create a director (admin only). Body: `{name, birthYear}`."""
    return DirectorResponse.model_validate(director_service.create_director(db, body))


@router.put(
    "/{director_id}",
    response_model=DirectorResponse,
    responses={**ADMIN_ERRORS, **NOT_FOUND},
)
def update_director(
    director_id: int,
    body: DirectorWriteRequest,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[Identity, Depends(require_admin)],
) -> DirectorResponse:
    return DirectorResponse.model_validate(
        director_service.update_director(db, director_id, body)
    )


@router.delete(
    "/{director_id}",
    response_model=DirectorDeleteResponse,
    responses={**ADMIN_ERRORS, **NOT_FOUND},
)
def delete_director(
    director_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[Identity, Depends(require_admin)],
) -> DirectorDeleteResponse:
    """Delete a director (admin only). Its movies remain, with director_id cleared."""
    director = director_service.delete_director(db, director_id)
    return DirectorDeleteResponse(message="Director deleted", director=director)
