"""
Create tables and insert sample directors and movies when the catalog is empty.
Run from project root:
  python -m app.scripts.seed
"""

import logging
import sys

from sqlalchemy.orm import Session

from app.core.database import SessionLocal, init_db
from app.models import Director, Movie

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

SAMPLE_DIRECTORS = [
    ("Christopher Nolan", 1970),
    ("Hayao Miyazaki", 1941),
    ("Bong Joon-ho", 1969),
    ("Greta Gerwig", 1983),
    ("Denis Villeneuve", 1967),
]

# (title, director name, year)
SAMPLE_MOVIES = [
    ("Parasite", "Bong Joon-ho", 2019),
    ("The Dark Knight", "Christopher Nolan", 2008),
    ("Interstellar", "Christopher Nolan", 2014),
    ("Spirited Away", "Hayao Miyazaki", 2001),
    ("Oppenheimer", "Christopher Nolan", 2023),
]


def seed_catalog(db: Session) -> tuple[int, int]:
    """Insert the sample rows into empty tables. Returns (directors_added, movies_added)."""
    directors_added = 0
    movies_added = 0
    if db.query(Director).count() == 0:
        db.add_all(Director(name=name, birth_year=year) for name, year in SAMPLE_DIRECTORS)
        db.flush()
        directors_added = len(SAMPLE_DIRECTORS)
    if db.query(Movie).count() == 0:
        by_name = {d.name: d.id for d in db.query(Director).all()}
        for title, director_name, year in SAMPLE_MOVIES:
            db.add(Movie(title=title, director_id=by_name.get(director_name), year=year))
            movies_added += 1
    db.commit()
    return directors_added, movies_added


def main() -> int:
    init_db()
    db = SessionLocal()
    try:
        directors_added, movies_added = seed_catalog(db)
        logger.info(
            "Seed completed: directors_added=%s movies_added=%s",
            directors_added,
            movies_added,
        )
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
