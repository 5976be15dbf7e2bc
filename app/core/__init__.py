"""Core configuration, database access, errors and security primitives."""

from app.core.config import Settings, get_settings, settings
from app.core.database import get_db, init_db

__all__ = ["Settings", "get_settings", "settings", "get_db", "init_db"]
