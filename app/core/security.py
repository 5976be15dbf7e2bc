"""Password hashing and JWT issuance/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from app.core.config import Settings

# Roles known to the system; a required role must match one of these exactly.
ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

# Bcrypt cost when the caller does not pass one.
BCRYPT_ROUNDS = 10

PASSWORD_MIN_LEN = 6
USERNAME_MAX_LEN = 255


@dataclass(frozen=True)
class Identity:
    """Who a token speaks for: account id, username and role as of issuance."""

    id: int
    username: str
    role: str

    def to_claim(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "role": self.role}


class TokenError(Exception):
    """Base class for token verification failures."""

    kind = "invalid"


class TokenMalformedError(TokenError):
    kind = "malformed"


class TokenSignatureError(TokenError):
    kind = "signature_invalid"


class TokenExpiredError(TokenError):
    kind = "expired"


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. A malformed hash is just a mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    The secret is passed in explicitly; build one per process with
    `TokenService.from_settings(settings)` and share it via app state.
    Tokens are stateless: there is no revocation, so a role change only
    takes effect once outstanding tokens expire.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, identity: Identity, issued_at: datetime | None = None) -> str:
        """Create a token carrying `{"user": {id, username, role}}`, iat and exp."""
        now = issued_at or datetime.now(UTC)
        payload: dict[str, Any] = {
            "user": identity.to_claim(),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Check signature and expiry and return the identity the token carries.
        Raises TokenMalformedError, TokenSignatureError or TokenExpiredError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("token expired") from e
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureError("signature verification failed") from e
        except jwt.PyJWTError as e:
            raise TokenMalformedError(str(e)) from e
        return _identity_from_payload(payload)


def _identity_from_payload(payload: dict[str, Any]) -> Identity:
    user = payload.get("user")
    if not isinstance(user, dict):
        raise TokenMalformedError("token payload has no user claim")
    user_id = user.get("id")
    username = user.get("username")
    role = user.get("role")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise TokenMalformedError("token user id must be an integer")
    if not isinstance(username, str) or not username:
        raise TokenMalformedError("token username missing")
    if role not in ROLES:
        raise TokenMalformedError("token role is not recognised")
    return Identity(id=user_id, username=username, role=role)
