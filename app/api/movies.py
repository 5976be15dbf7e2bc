"""Movie endpoints. Reads are public; writes need any authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.database import get_db
from app.core.security import Identity
from app.schemas.common import ErrorResponse
from app.schemas.movie import MovieDeleteResponse, MovieResponse, MovieWriteRequest
from app.services import movies as movie_service

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}
WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.get("", response_model=list[MovieResponse])
def list_movies(db: Annotated[Session, Depends(get_db)]) -> list[MovieResponse]:
    """All movies ordered by id, with the director's name joined in."""
    return [MovieResponse.model_validate(m) for m in movie_service.list_movies(db)]


@router.get("/{movie_id}", response_model=MovieResponse, responses=NOT_FOUND)
def get_movie(movie_id: int, db: Annotated[Session, Depends(get_db)]) -> MovieResponse:
    return MovieResponse.model_validate(movie_service.get_movie(db, movie_id))


@router.post(
    "",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_ERRORS,
)
def create_movie(
    body: MovieWriteRequest,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[Identity, Depends(get_current_user)],
) -> MovieResponse:
    """Create a movie. `director_id` must reference an existing director (400 otherwise)."""
    return MovieResponse.model_validate(movie_service.create_movie(db, body))


@router.put(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
)
def update_movie(
    movie_id: int,
    body: MovieWriteRequest,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[Identity, Depends(get_current_user)],
) -> MovieResponse:
    return MovieResponse.model_validate(movie_service.update_movie(db, movie_id, body))


@router.delete(
    "/{movie_id}",
    response_model=MovieDeleteResponse,
    responses={**WRITE_ERRORS, **NOT_FOUND},
)
def delete_movie(
    movie_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[Identity, Depends(get_current_user)],
) -> MovieDeleteResponse:
    movie = movie_service.delete_movie(db, movie_id)
    return MovieDeleteResponse(message="Movie deleted", movie=movie)
