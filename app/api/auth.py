"""Registration and JWT login."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import admin_registration_gate, get_app_settings, get_token_service
from app.core.config import Settings
from app.core.database import get_db
from app.core.security import ROLE_ADMIN, ROLE_USER, Identity, TokenService
from app.schemas.auth import CredentialsRequest, LoginResponse, UserResponse
from app.schemas.common import ErrorResponse
from app.services.users import authenticate_user, identity_for, register_user

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def register(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserResponse:
    """Create a `user` account. Username is case-insensitive; password needs at least 6 characters."""
    user = register_user(
        db,
        body.username,
        body.password,
        role=ROLE_USER,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return UserResponse.model_validate(user)


@router.post(
    "/register-admin",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def register_admin(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    _gate: Annotated[Identity | None, Depends(admin_registration_gate)],
) -> UserResponse:
    """
    Create an `admin` account.

    Open to anyone unless ADMIN_REGISTRATION is `admin` (requires an admin
    bearer token) or `disabled`. For production, seed admins with
    `python -m app.scripts.create_user` and disable this route.
    """
    user = register_user(
        db,
        body.username,
        body.password,
        role=ROLE_ADMIN,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
)
def login(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate_user(
        db, body.username, body.password, rounds=settings.BCRYPT_ROUNDS
    )
    token = token_service.issue(identity_for(user))
    return LoginResponse(message="Login successful", token=token)
