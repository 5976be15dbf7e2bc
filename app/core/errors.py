"""Application error taxonomy. Each error carries the HTTP status it is rendered with."""


class AppError(Exception):
    """Base class for errors that map to a JSON `{"error": message}` response."""

    status_code: int = 500
    default_message: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(AppError):
    """Request could not be authenticated."""

    status_code = 401
    default_message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class MissingTokenError(AuthenticationError):
    """No bearer credential was supplied."""

    default_message = "Token not found. Please log in first."


class InvalidTokenError(AuthenticationError):
    """Bearer credential is malformed, tampered or expired. The cause is never exposed."""

    status_code = 403
    default_message = "Invalid or expired token"
    headers = {"WWW-Authenticate": 'Bearer error="invalid_token"'}


class AuthorizationError(AppError):
    """Authenticated identity lacks the required role."""

    status_code = 403
    default_message = "Access denied: role does not have permission"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Unique constraint violation."""

    status_code = 409
    default_message = "Resource already exists"


class ReferentialError(AppError):
    """Foreign key points at a row that does not exist."""

    status_code = 400
    default_message = "Referenced resource does not exist"


class InternalError(AppError):
    status_code = 500
