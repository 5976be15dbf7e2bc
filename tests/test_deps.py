"""Unit tests for the authentication and authorization dependencies in app.api.deps."""

import unittest

from fastapi.security import HTTPAuthorizationCredentials

from app.api.deps import authorize_role, resolve_identity
from app.core.errors import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    MissingTokenError,
)
from app.core.security import Identity, TokenService
from tests.support import ApiTestCase

USER = Identity(id=1, username="alice", role="user")
ADMIN = Identity(id=2, username="root", role="admin")


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestResolveIdentity(unittest.TestCase):
    """Missing credential -> 401; every verification failure -> the same 403."""

    def setUp(self) -> None:
        self.service = TokenService(secret="s3cret")

    def test_valid_token(self) -> None:
        token = self.service.issue(USER)
        self.assertEqual(resolve_identity(_bearer(token), self.service), USER)

    def test_missing_credentials(self) -> None:
        with self.assertRaises(MissingTokenError) as ctx:
            resolve_identity(None, self.service)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_empty_credential(self) -> None:
        with self.assertRaises(MissingTokenError):
            resolve_identity(_bearer(""), self.service)

    def test_failures_are_indistinguishable(self) -> None:
        wrong_secret = TokenService(secret="other").issue(USER)
        messages = set()
        for token in ("garbage", wrong_secret):
            with self.assertRaises(InvalidTokenError) as ctx:
                resolve_identity(_bearer(token), self.service)
            self.assertEqual(ctx.exception.status_code, 403)
            messages.add(ctx.exception.message)
        self.assertEqual(len(messages), 1)


class TestBearerHeaderParsing(ApiTestCase):
    """HTTPBearer parses the Authorization header and documents the scheme."""

    def test_scheme_without_credential_is_401(self) -> None:
        resp = self.client.delete("/movies/1", headers={"Authorization": "Bearer"})
        self.assertEqual(resp.status_code, 401)

    def test_non_bearer_scheme_is_401(self) -> None:
        resp = self.client.delete("/movies/1", headers={"Authorization": "Basic YWxpY2U6cHc="})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Token not found. Please log in first."})

    def test_lowercase_scheme_accepted(self) -> None:
        self.register("alice")
        token = self.login("alice")
        resp = self.client.delete("/movies/1", headers={"Authorization": f"bearer {token}"})
        self.assertEqual(resp.status_code, 404)

    def test_openapi_declares_bearer_scheme(self) -> None:
        schema = self.client.get("/openapi.json").json()
        schemes = schema["components"]["securitySchemes"]
        self.assertIn("HTTPBearer", schemes)
        self.assertEqual(schemes["HTTPBearer"]["scheme"], "bearer")


class TestAuthorizeRole(unittest.TestCase):
    """Exact-match role policy with no hierarchy."""

    def test_matching_role_allowed(self) -> None:
        self.assertIs(authorize_role(ADMIN, "admin"), ADMIN)
        self.assertIs(authorize_role(USER, "user"), USER)

    def test_user_denied_admin(self) -> None:
        with self.assertRaises(AuthorizationError) as ctx:
            authorize_role(USER, "admin")
        self.assertEqual(ctx.exception.status_code, 403)

    def test_admin_not_implied_for_user_role(self) -> None:
        with self.assertRaises(AuthorizationError):
            authorize_role(ADMIN, "user")

    def test_no_identity_is_unauthenticated(self) -> None:
        with self.assertRaises(AuthenticationError) as ctx:
            authorize_role(None, "admin")
        self.assertEqual(ctx.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
