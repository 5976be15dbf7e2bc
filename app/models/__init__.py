"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.director import Director
from app.models.movie import Movie
from app.models.user import User

__all__ = ["Base", "Director", "Movie", "User"]
