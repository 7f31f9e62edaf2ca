"""Tests for session tokens, registration, sign in and the session cookie."""

import time

from chameleon_docs.core.config import settings
from chameleon_docs.core.token_factory import create_token, decode_token
from tests.conftest import DEFAULT_PASSWORD, login, make_user

SECRET = "test-secret-key"


class TestTokenFactory:
    """Pure function tests: no database, no HTTP."""

    def test_round_trip(self):
        token = create_token("user-1", "ada@example.com", SECRET)
        payload = decode_token(token, SECRET)
        assert payload is not None
        assert payload.sub == "user-1"
        assert payload.email == "ada@example.com"

    def test_wrong_secret_rejected(self):
        token = create_token("user-1", "ada@example.com", SECRET)
        assert decode_token(token, "another-secret") is None

    def test_expired_token_rejected(self):
        token = create_token("user-1", "ada@example.com", SECRET, expires_hours=-1)
        assert decode_token(token, SECRET) is None

    def test_tampered_payload_rejected(self):
        token = create_token("user-1", "ada@example.com", SECRET)
        header, _, signature = token.split(".")
        forged = create_token("user-2", "eve@example.com", SECRET).split(".")[1]
        assert decode_token(f"{header}.{forged}.{signature}", SECRET) is None

    def test_malformed_token_rejected(self):
        assert decode_token("not-a-token", SECRET) is None
        assert decode_token("a.b.c", SECRET) is None

    def test_unsupported_algorithm(self):
        import pytest

        with pytest.raises(ValueError):
            create_token("user-1", "ada@example.com", SECRET, algorithm="RS256")

    def test_expiry_in_future(self):
        token = create_token("user-1", "ada@example.com", SECRET, expires_hours=1)
        payload = decode_token(token, SECRET)
        assert payload.exp.timestamp() > time.time()


class TestRegister:

    def test_register_creates_account(self, client):
        resp = client.post(
            "/api/auth/register",
            json={"name": "Grace", "email": "grace@example.com", "password": DEFAULT_PASSWORD},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["user_id"]

    def test_missing_fields(self, client):
        resp = client.post("/api/auth/register", json={"name": "", "email": "x@example.com", "password": "p"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Missing fields", "error_code": "VALIDATION_ERROR"}

    def test_duplicate_email(self, client, user):
        resp = client.post(
            "/api/auth/register",
            json={"name": "Other", "email": "ADA@example.com", "password": DEFAULT_PASSWORD},
        )
        assert resp.status_code == 409
        assert resp.json()["error"] == "Email already in use"

    def test_password_is_hashed(self, db, user):
        assert user.password_hash != DEFAULT_PASSWORD
        assert user.password_hash.startswith("$2")


class TestLogin:

    def test_login_sets_session_cookie(self, client, user):
        resp = login(client)
        body = resp.json()
        assert body["success"] is True
        assert body["user_id"] == user.id
        assert body["token"]
        assert settings.session_cookie_name in resp.cookies

    def test_wrong_password(self, client, user):
        resp = client.post("/api/auth/login", json={"email": user.email, "password": "wrong-password"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "Invalid email or password"

    def test_unknown_email_same_error(self, client):
        resp = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "whatever1"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "Invalid email or password"

    def test_email_is_case_insensitive(self, client, user):
        resp = client.post("/api/auth/login", json={"email": "Ada@Example.com", "password": DEFAULT_PASSWORD})
        assert resp.status_code == 200


class TestMe:

    def test_me_without_session(self, client):
        resp = client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["error"] == "UNAUTHORIZED"

    def test_me_with_cookie(self, auth_client, user):
        resp = auth_client.get("/api/auth/me")
        assert resp.status_code == 200
        data = resp.json()
        assert data["user"]["email"] == "ada@example.com"
        assert data["preferences"]["default_simplification_level"] == "standard"

    def test_me_with_bearer_header(self, client, user):
        token = login(client).json()["token"]
        client.cookies.clear()
        resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == user.id

    def test_logout_clears_session(self, auth_client):
        resp = auth_client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert auth_client.get("/api/auth/me").status_code == 401

    def test_token_of_deleted_user_is_invalid(self, client, db):
        other = make_user(db, name="Temp", email="temp@example.com")
        token = login(client, email="temp@example.com").json()["token"]
        client.cookies.clear()
        db.delete(other)
        db.commit()
        resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
