"""Relational store connection, session management and integrity-error classification."""

from collections.abc import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import AppError, ConflictError, InternalError, ReferentialError

# SQLSTATE codes raised by PostgreSQL for constraint violations.
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set on every connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.DEBUG,
        )
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine
    return create_engine(url, pool_pre_ping=True, echo=settings.DEBUG)


engine = _build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet (dev and tests; production uses Alembic)."""
    from app.models import Base

    Base.metadata.create_all(bind=bind or engine)


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def classify_integrity_error(exc: IntegrityError) -> AppError:
    """
    Map a constraint violation to the application error taxonomy.

    Recognises PostgreSQL SQLSTATEs (psycopg2 exposes them as `pgcode`) and
    the equivalent SQLite messages. Anything else is an InternalError.
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    message = str(orig).lower()
    if code == PG_UNIQUE_VIOLATION or "unique constraint" in message:
        return ConflictError()
    if code == PG_FOREIGN_KEY_VIOLATION or "foreign key constraint" in message:
        return ReferentialError()
    return InternalError()
