"""Request dependencies: settings, DB session, bearer authentication and role checks."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.errors import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    MissingTokenError,
)
from app.core.security import ROLE_ADMIN, Identity, TokenError, TokenService

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported through MissingTokenError.
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with (see create_app)."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    """Process-wide TokenService created once at startup."""
    return request.app.state.token_service


def resolve_identity(
    credentials: HTTPAuthorizationCredentials | None,
    token_service: TokenService,
) -> Identity:
    """
    Authenticate the bearer credentials parsed by HTTPBearer.

    Missing credential -> MissingTokenError (401). Any verification failure
    (malformed, bad signature, expired) -> InvalidTokenError (403); the kind
    is logged but never returned to the caller.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    try:
        return token_service.verify(credentials.credentials)
    except TokenError as e:
        logger.warning("Token verification failed: kind=%s", e.kind)
        raise InvalidTokenError() from e


def get_current_user(
    request: Request,
    token_service: Annotated[TokenService, Depends(get_token_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """
    Dependency: require a valid bearer token and return its identity.

    The identity is taken from the token as issued; the users table is not
    consulted, so role changes apply only after outstanding tokens expire.
    """
    identity = resolve_identity(credentials, token_service)
    request.state.user = identity
    return identity


def authorize_role(identity: Identity | None, required_role: str) -> Identity:
    """Exact-match role check. No identity -> 401; any other role -> 403."""
    if identity is None:
        raise AuthenticationError()
    if identity.role != required_role:
        logger.warning(
            "Role check denied: user_id=%s role=%s required=%s",
            identity.id,
            identity.role,
            required_role,
        )
        raise AuthorizationError()
    return identity


def require_role(role: str) -> Callable[..., Identity]:
    """Build a dependency that authenticates the request and then requires `role`."""

    def dependency(
        current_user: Annotated[Identity, Depends(get_current_user)],
    ) -> Identity:
        return authorize_role(current_user, role)

    dependency.__name__ = f"require_{role}"
    return dependency


require_admin = require_role(ROLE_ADMIN)


def admin_registration_gate(
    settings: Annotated[Settings, Depends(get_app_settings)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity | None:
    """
    Dependency guarding POST /auth/register-admin according to ADMIN_REGISTRATION.

    open: no check. admin: caller must present an admin token. disabled: always 403.
    """
    if settings.ADMIN_REGISTRATION == "open":
        return None
    if settings.ADMIN_REGISTRATION == "disabled":
        raise AuthorizationError("Admin registration is disabled")
    identity = resolve_identity(credentials, token_service)
    return authorize_role(identity, ROLE_ADMIN)
