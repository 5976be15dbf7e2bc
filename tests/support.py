"""Shared fixtures: an isolated app + in-memory SQLite database per test."""

import unittest
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import enable_sqlite_foreign_keys, get_db, init_db
from app.main import create_app

DEFAULT_PASSWORD = "secret123"


def make_settings(**overrides: Any) -> Settings:
    """Settings for tests; ignores any .env file in the working directory."""
    values: dict[str, Any] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret",
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ApiTestCase(unittest.TestCase):
    """Builds a fresh app, database and TestClient for every test."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        enable_sqlite_foreign_keys(self.engine)
        init_db(self.engine)
        self.SessionTesting = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False
        )
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        self.app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        self.engine.dispose()

    def register(
        self, username: str, password: str = DEFAULT_PASSWORD, admin: bool = False
    ) -> dict[str, Any]:
        path = "/auth/register-admin" if admin else "/auth/register"
        resp = self.client.post(path, json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def login(self, username: str, password: str = DEFAULT_PASSWORD) -> str:
        resp = self.client.post("/auth/login", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["token"]

    def user_headers(self, username: str = "alice") -> dict[str, str]:
        self.register(username)
        return {"Authorization": f"Bearer {self.login(username)}"}

    def admin_headers(self, username: str = "root") -> dict[str, str]:
        self.register(username, admin=True)
        return {"Authorization": f"Bearer {self.login(username)}"}

    def create_director(
        self, headers: dict[str, str], name: str = "Bong Joon-ho", birth_year: int | None = 1969
    ) -> dict[str, Any]:
        resp = self.client.post(
            "/directors", json={"name": name, "birthYear": birth_year}, headers=headers
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()
