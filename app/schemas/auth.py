"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    """Username and password for register and login. Presence and length are checked by the service."""

    username: str | None = Field(default=None, description="Username (case-insensitive)")
    password: str | None = Field(default=None, description="Password (min 6 characters)")


class UserResponse(BaseModel):
    """Created account (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class LoginResponse(BaseModel):
    """Bearer token returned after successful login."""

    message: str = Field(default="Login successful")
    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")
