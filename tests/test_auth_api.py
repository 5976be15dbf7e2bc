"""API tests for /auth: registration, login and admin registration gating."""

import unittest

import jwt

from app.core.security import ROLE_ADMIN
from app.services.users import register_user
from tests.support import DEFAULT_PASSWORD, ApiTestCase


class TestRegister(ApiTestCase):

    def test_register_returns_user_role_without_hash(self) -> None:
        body = self.register("alice")
        self.assertEqual(set(body), {"id", "username", "role"})
        self.assertEqual(body["username"], "alice")
        self.assertEqual(body["role"], "user")

    def test_username_is_case_folded(self) -> None:
        body = self.register("Alice")
        self.assertEqual(body["username"], "alice")

    def test_duplicate_username_case_insensitive_conflicts(self) -> None:
        self.register("alice")
        resp = self.client.post(
            "/auth/register", json={"username": "ALICE", "password": DEFAULT_PASSWORD}
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"error": "Username already taken"})

    def test_short_password_rejected(self) -> None:
        resp = self.client.post("/auth/register", json={"username": "bob", "password": "12345"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    def test_six_character_password_accepted(self) -> None:
        resp = self.client.post("/auth/register", json={"username": "bob", "password": "123456"})
        self.assertEqual(resp.status_code, 201)

    def test_missing_username_rejected(self) -> None:
        resp = self.client.post("/auth/register", json={"password": DEFAULT_PASSWORD})
        self.assertEqual(resp.status_code, 400)

    def test_blank_username_rejected(self) -> None:
        resp = self.client.post("/auth/register", json={"username": "  ", "password": DEFAULT_PASSWORD})
        self.assertEqual(resp.status_code, 400)

    def test_non_object_body_rejected(self) -> None:
        resp = self.client.post("/auth/register", json=["alice", DEFAULT_PASSWORD])
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())


class TestLogin(ApiTestCase):

    def test_login_returns_token_with_stored_role(self) -> None:
        self.register("alice")
        resp = self.client.post("/auth/login", json={"username": "alice", "password": DEFAULT_PASSWORD})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Login successful")
        payload = jwt.decode(body["token"], "test-secret", algorithms=["HS256"])
        self.assertEqual(payload["user"]["username"], "alice")
        self.assertEqual(payload["user"]["role"], "user")

    def test_admin_login_token_carries_admin_role(self) -> None:
        self.register("root", admin=True)
        token = self.login("root")
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])
        self.assertEqual(payload["user"]["role"], "admin")

    def test_login_is_case_insensitive(self) -> None:
        self.register("alice")
        self.login("ALICE")

    def test_wrong_password_and_unknown_user_look_identical(self) -> None:
        self.register("alice")
        wrong = self.client.post("/auth/login", json={"username": "alice", "password": "wrong-pass"})
        unknown = self.client.post("/auth/login", json={"username": "nobody", "password": "wrong-pass"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json(), {"error": "Invalid credentials"})

    def test_missing_fields_rejected(self) -> None:
        resp = self.client.post("/auth/login", json={"username": "alice"})
        self.assertEqual(resp.status_code, 400)


class TestRegisterAdminOpen(ApiTestCase):
    """Default ADMIN_REGISTRATION=open: no token required."""

    def test_creates_admin(self) -> None:
        body = self.register("root", admin=True)
        self.assertEqual(body["role"], "admin")

    def test_short_password_rejected(self) -> None:
        resp = self.client.post("/auth/register-admin", json={"username": "root", "password": "123"})
        self.assertEqual(resp.status_code, 400)

    def test_duplicate_conflicts(self) -> None:
        self.register("root", admin=True)
        resp = self.client.post(
            "/auth/register-admin", json={"username": "root", "password": DEFAULT_PASSWORD}
        )
        self.assertEqual(resp.status_code, 409)


class TestRegisterAdminRequiresAdmin(ApiTestCase):
    settings_overrides = {"ADMIN_REGISTRATION": "admin"}

    def _seed_admin_headers(self) -> dict[str, str]:
        db = self.SessionTesting()
        try:
            register_user(db, "root", DEFAULT_PASSWORD, role=ROLE_ADMIN, rounds=4)
        finally:
            db.close()
        return {"Authorization": f"Bearer {self.login('root')}"}

    def test_without_token_is_401(self) -> None:
        resp = self.client.post(
            "/auth/register-admin", json={"username": "eve", "password": DEFAULT_PASSWORD}
        )
        self.assertEqual(resp.status_code, 401)

    def test_user_token_is_403(self) -> None:
        headers = self.user_headers("alice")
        resp = self.client.post(
            "/auth/register-admin",
            json={"username": "eve", "password": DEFAULT_PASSWORD},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 403)

    def test_admin_token_creates_admin(self) -> None:
        headers = self._seed_admin_headers()
        resp = self.client.post(
            "/auth/register-admin",
            json={"username": "second", "password": DEFAULT_PASSWORD},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["role"], "admin")


class TestRegisterAdminDisabled(ApiTestCase):
    settings_overrides = {"ADMIN_REGISTRATION": "disabled"}

    def test_always_forbidden(self) -> None:
        resp = self.client.post(
            "/auth/register-admin", json={"username": "root", "password": DEFAULT_PASSWORD}
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"error": "Admin registration is disabled"})

    def test_public_registration_still_works(self) -> None:
        self.assertEqual(self.register("alice")["role"], "user")


if __name__ == "__main__":
    unittest.main()
