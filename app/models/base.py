"""SQLAlchemy declarative Base shared by users, directors and movies."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata drives init_db and Alembic autogenerate."""

    pass
