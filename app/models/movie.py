"""ORM model for catalog movies."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class Movie(Base):
    """A movie with a many-to-one link to its director."""

    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    year = Column(Integer, nullable=False)
    director_id = Column(
        Integer,
        ForeignKey("directors.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    director = relationship("Director", back_populates="movies")

    @property
    def director_name(self) -> str | None:
        return self.director.name if self.director is not None else None
