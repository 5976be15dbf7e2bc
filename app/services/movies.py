"""Movie catalog: list, fetch, create, replace and delete movies."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.database import classify_integrity_error
from app.core.errors import NotFoundError, ReferentialError, ValidationError
from app.models import Movie
from app.schemas.movie import MovieResponse, MovieWriteRequest

logger = logging.getLogger(__name__)

MOVIE_NOT_FOUND = "Movie not found"
DIRECTOR_ID_NOT_FOUND = "director_id not found"


def _validate(body: MovieWriteRequest) -> None:
    if (
        not body.title
        or not body.title.strip()
        or body.director_id is None
        or body.year is None
    ):
        raise ValidationError("title, director_id, year are required")


def _commit_or_raise(db: Session) -> None:
    """Commit; an unknown director_id surfaces as ReferentialError, other violations per taxonomy."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        error = classify_integrity_error(e)
        if isinstance(error, ReferentialError):
            raise ReferentialError(DIRECTOR_ID_NOT_FOUND) from e
        raise error from e


def list_movies(db: Session) -> list[Movie]:
    return (
        db.query(Movie)
        .options(joinedload(Movie.director))
        .order_by(Movie.id)
        .all()
    )


def get_movie(db: Session, movie_id: int) -> Movie:
    movie = (
        db.query(Movie)
        .options(joinedload(Movie.director))
        .filter(Movie.id == movie_id)
        .first()
    )
    if movie is None:
        raise NotFoundError(MOVIE_NOT_FOUND)
    return movie


def create_movie(db: Session, body: MovieWriteRequest) -> Movie:
    """Insert a movie. The director must exist (enforced by the foreign key)."""
    _validate(body)
    movie = Movie(title=body.title.strip(), director_id=body.director_id, year=body.year)
    db.add(movie)
    _commit_or_raise(db)
    logger.info("Created movie: id=%s director_id=%s", movie.id, movie.director_id)
    return get_movie(db, movie.id)


def update_movie(db: Session, movie_id: int, body: MovieWriteRequest) -> Movie:
    """Replace title, director and year of an existing movie."""
    _validate(body)
    movie = db.get(Movie, movie_id)
    if movie is None:
        raise NotFoundError(MOVIE_NOT_FOUND)
    movie.title = body.title.strip()
    movie.director_id = body.director_id
    movie.year = body.year
    _commit_or_raise(db)
    return get_movie(db, movie_id)


def delete_movie(db: Session, movie_id: int) -> MovieResponse:
    """Delete a movie and return what it looked like just before deletion."""
    movie = get_movie(db, movie_id)
    snapshot = MovieResponse.model_validate(movie)
    db.delete(movie)
    db.commit()
    logger.info("Deleted movie: id=%s", movie_id)
    return snapshot
