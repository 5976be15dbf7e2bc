"""ORM model for film directors."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class Director(Base):
    """A director; movies reference it by director_id."""

    __tablename__ = "directors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    birth_year = Column(Integer, nullable=True)

    # The database nulls movies.director_id on delete; the ORM must not try to do it first.
    movies = relationship("Movie", back_populates="director", passive_deletes=True)
