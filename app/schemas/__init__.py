"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CredentialsRequest,
    LoginResponse,
    UserResponse,
)
from app.schemas.common import ErrorResponse
from app.schemas.director import (
    DirectorDeleteResponse,
    DirectorResponse,
    DirectorWriteRequest,
)
from app.schemas.movie import MovieDeleteResponse, MovieResponse, MovieWriteRequest
from app.schemas.status import StatusResponse

__all__ = [
    "CredentialsRequest",
    "DirectorDeleteResponse",
    "DirectorResponse",
    "DirectorWriteRequest",
    "ErrorResponse",
    "LoginResponse",
    "MovieDeleteResponse",
    "MovieResponse",
    "MovieWriteRequest",
    "StatusResponse",
    "UserResponse",
]
