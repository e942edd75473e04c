"""Integration tests for the auth API endpoints and middleware."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from nrfdesk.admin_users.store import InMemoryAdminUserStore
from nrfdesk.auth.errors import CredentialStoreError
from nrfdesk.core.config import AuthConfig, Settings
from nrfdesk.web.app import create_app

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, TEST_ROUNDS, install_admin_token


class DownStore(InMemoryAdminUserStore):
    def find_by_identifier(self, identifier):
        raise CredentialStoreError("database offline")


def _fallback_settings() -> Settings:
    return Settings(
        auth=AuthConfig(
            bcrypt_rounds=TEST_ROUNDS,
            fallback_identifier="admin@x.com",
            fallback_secret="fallback-pass",
        )
    )


@pytest.fixture
def client(settings, admin_store) -> TestClient:
    app = create_app(settings=settings, admin_user_store=admin_store)
    return TestClient(app)


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "nrf-desk"
        assert data["storage"] == "memory"


class TestLogin:
    def test_login_success(self, client: TestClient) -> None:
        resp = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"]
        assert data["token"]
        assert data["user_id"] == "1"
        assert data["email"] == ADMIN_EMAIL
        assert "error" not in data
        assert resp.cookies.get("nrf_admin") == data["token"]

    @pytest.mark.parametrize(
        "body",
        [
            {"email": ADMIN_EMAIL, "password": "wrong-password"},
            {"email": "nobody@x.com", "password": ADMIN_PASSWORD},
            {"email": "", "password": ""},
        ],
    )
    def test_login_failures_look_the_same(self, client: TestClient, body) -> None:
        resp = client.post("/api/auth/login", json=body)
        assert resp.status_code == 401
        assert resp.json() == {"detail": "Invalid email or password"}
        assert "nrf_admin" not in resp.cookies

    def test_login_missing_body_fields(self, client: TestClient) -> None:
        resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})
        assert resp.status_code == 422

    def test_login_long_password(self, client: TestClient, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="nrfdesk.auth.hashing"):
            resp = client.post(
                "/api/auth/login",
                json={"email": ADMIN_EMAIL, "password": "p" * 80},
            )
        assert resp.status_code == 401
        assert resp.json() == {"detail": "Invalid email or password"}
        assert not [r for r in caplog.records if r.name == "nrfdesk.auth.hashing"]

    def test_fallback_login_when_store_down(self) -> None:
        app = create_app(settings=_fallback_settings(), admin_user_store=DownStore())
        client = TestClient(app)
        resp = client.post(
            "/api/auth/login",
            json={"email": "admin@x.com", "password": "fallback-pass"},
        )
        assert resp.status_code == 200
        assert resp.json()["user_id"] == "fallback-admin"

    def test_store_down_without_fallback(self, settings) -> None:
        app = create_app(settings=settings, admin_user_store=DownStore())
        client = TestClient(app)
        resp = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        assert resp.status_code == 401
        assert resp.json() == {"detail": "Invalid email or password"}


class TestSession:
    def test_me_requires_login(self, client: TestClient) -> None:
        resp = client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Unauthorized"

    def test_me_with_bearer_token(self, client: TestClient) -> None:
        token = install_admin_token(client.app)
        resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json() == {"user_id": "test-admin", "email": "test-admin@x.com"}

    def test_me_with_cookie(self, client: TestClient) -> None:
        client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        resp = client.get("/api/auth/me")
        assert resp.status_code == 200
        assert resp.json()["email"] == ADMIN_EMAIL

    def test_bad_token(self, client: TestClient) -> None:
        resp = client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    def test_logout_revokes(self, client: TestClient) -> None:
        token = install_admin_token(client.app)
        headers = {"Authorization": f"Bearer {token}"}
        resp = client.post("/api/auth/logout", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"revoked": True}
        assert client.get("/api/auth/me", headers=headers).status_code == 401

    def test_logout_without_session(self, client: TestClient) -> None:
        resp = client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json() == {"revoked": False}

    def test_custom_cookie_name(self, admin_store) -> None:
        settings = Settings(auth=AuthConfig(bcrypt_rounds=TEST_ROUNDS, cookie_name="desk"))
        client = TestClient(create_app(settings=settings, admin_user_store=admin_store))
        resp = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        assert "desk" in resp.cookies
        assert client.get("/api/auth/me").status_code == 200
