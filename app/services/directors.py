"""Directors: list, fetch, create, replace and delete."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models import Director
from app.schemas.director import DirectorResponse, DirectorWriteRequest

logger = logging.getLogger(__name__)

DIRECTOR_NOT_FOUND = "Director not found"


def _validate(body: DirectorWriteRequest) -> str:
    if not body.name or not body.name.strip():
        raise ValidationError("name is required")
    return body.name.strip()


def list_directors(db: Session) -> list[Director]:
    return db.query(Director).order_by(Director.id).all()


def get_director(db: Session, director_id: int) -> Director:
    director = db.get(Director, director_id)
    if director is None:
        raise NotFoundError(DIRECTOR_NOT_FOUND)
    return director


def create_director(db: Session, body: DirectorWriteRequest) -> Director:
    name = _validate(body)
    director = Director(name=name, birth_year=body.birth_year)
    db.add(director)
    db.commit()
    db.refresh(director)
    logger.info("Created director: id=%s", director.id)
    return director


def update_director(db: Session, director_id: int, body: DirectorWriteRequest) -> Director:
    name = _validate(body)
    director = get_director(db, director_id)
    director.name = name
    director.birth_year = body.birth_year
    db.commit()
    db.refresh(director)
    return director


def delete_director(db: Session, director_id: int) -> DirectorResponse:
    """
    Delete a director and return its last state.

    Movies pointing at it keep existing with director_id set to NULL
    (ON DELETE SET NULL), which is why listings LEFT JOIN directors.
    """
    director = get_director(db, director_id)
    snapshot = DirectorResponse.model_validate(director)
    db.delete(director)
    db.commit()
    logger.info("Deleted director: id=%s", director_id)
    return snapshot
