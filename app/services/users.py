"""Account registration and password login against the users table."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import classify_integrity_error
from app.core.errors import AuthenticationError, ConflictError, ValidationError
from app.core.security import (
    BCRYPT_ROUNDS,
    PASSWORD_MIN_LEN,
    ROLE_USER,
    ROLES,
    USERNAME_MAX_LEN,
    Identity,
    hash_password,
    verify_password,
)
from app.models import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int = BCRYPT_ROUNDS) -> str:
    """Throwaway hash at the configured cost, so a miss costs as much as a real check."""
    return hash_password("not-a-real-password", rounds=rounds)


def normalize_username(username: str) -> str:
    """Usernames are unique case-insensitively; store and look them up lower-cased."""
    return username.strip().lower()


def _validate_registration(username: str | None, password: str | None) -> str:
    if not username or not username.strip() or not password or len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(
            f"Username and password (min {PASSWORD_MIN_LEN} characters) are required"
        )
    normalized = normalize_username(username)
    if len(normalized) > USERNAME_MAX_LEN:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LEN} characters")
    return normalized


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == normalize_username(username)).first()


def register_user(
    db: Session,
    username: str | None,
    password: str | None,
    role: str = ROLE_USER,
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """
    Create an account with a bcrypt-hashed password.

    Raises ValidationError for a missing username or short password and
    ConflictError when the (case-folded) username is already taken.
    """
    if role not in ROLES:
        raise ValueError(f"unknown role: {role!r}")
    normalized = _validate_registration(username, password)
    user = User(
        username=normalized,
        password_hash=hash_password(password, rounds=rounds),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        error = classify_integrity_error(e)
        if isinstance(error, ConflictError):
            raise ConflictError("Username already taken") from e
        raise error from e
    db.refresh(user)
    logger.info("Registered user: username=%s role=%s", user.username, user.role)
    return user


def authenticate_user(
    db: Session,
    username: str | None,
    password: str | None,
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """
    Return the account whose password matches.

    Unknown usernames and wrong passwords raise the same AuthenticationError
    so callers cannot tell which one failed.
    """
    if not username or not password:
        raise ValidationError("Username and password are required")
    user = get_user_by_username(db, username)
    # Unknown users still pay for one bcrypt check so response time does not reveal them.
    stored_hash = user.password_hash if user is not None else _dummy_hash(rounds)
    password_ok = verify_password(password, stored_hash)
    if user is None or not password_ok:
        logger.info("Failed login attempt: username=%s", normalize_username(username))
        raise AuthenticationError(INVALID_CREDENTIALS)
    return user


def identity_for(user: User) -> Identity:
    return Identity(id=user.id, username=user.username, role=user.role)
