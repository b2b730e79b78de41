"""
HTTP-level tests for /api/auth.
"""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

from auth.google import profile_from_userinfo
from tests.helpers import bearer, register


class TestRegisterAndLogin:
    def test_register_login_scenario(self, client):
        body = register(client, "a@b.com", "secret1")
        assert body["access_token"]
        assert body["user"]["email"] == "a@b.com"
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

        again = client.post("/api/auth/register", json={"email": "a@b.com", "password": "secret1"})
        assert again.status_code == 409
        assert again.json()["message"] == "User already exists"

        wrong = client.post("/api/auth/login", json={"email": "a@b.com", "password": "wrong"})
        assert wrong.status_code == 401

        users = client.get("/api/users", headers=bearer(body["access_token"])).json()
        assert [u["email"] for u in users] == ["a@b.com"]

    def test_login_success(self, client):
        register(client, "a@b.com", "secret1", firstName="Ada")
        resp = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["access_token"]
        assert body["user"]["firstName"] == "Ada"
        assert "password" not in body["user"]

    def test_unknown_email_and_wrong_password_look_the_same(self, client):
        register(client, "a@b.com", "secret1")
        unknown = client.post("/api/auth/login", json={"email": "x@b.com", "password": "secret1"})
        wrong = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret9"})
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_login_with_email_exactly_as_registered(self, client):
        body = register(client, "Ada@Example.COM", "secret1")
        assert body["user"]["email"] == "Ada@Example.COM"

        resp = client.post("/api/auth/login", json={"email": "Ada@Example.COM", "password": "secret1"})
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == body["user"]["id"]

    def test_email_with_surrounding_whitespace_rejected(self, client):
        resp = client.post("/api/auth/register", json={"email": " a@b.com ", "password": "secret1"})
        assert resp.status_code == 422

    def test_login_ignores_unknown_fields(self, client):
        register(client, "a@b.com", "secret1")
        ok = client.post(
            "/api/auth/login",
            json={"email": "a@b.com", "password": "secret1", "rememberMe": True},
        )
        assert ok.status_code == 200
        wrong = client.post(
            "/api/auth/login",
            json={"email": "a@b.com", "password": "wrong", "rememberMe": True},
        )
        assert wrong.status_code == 401

    def test_register_validation(self, client):
        short = client.post("/api/auth/register", json={"email": "a@b.com", "password": "123"})
        assert short.status_code == 422
        bad_email = client.post("/api/auth/register", json={"email": "nope", "password": "secret1"})
        assert bad_email.status_code == 422
        extra = client.post(
            "/api/auth/register",
            json={"email": "a@b.com", "password": "secret1", "isActive": False},
        )
        assert extra.status_code == 422
        long_name = client.post(
            "/api/auth/register",
            json={"email": "a@b.com", "password": "secret1", "firstName": "x" * 51},
        )
        assert long_name.status_code == 422


class TestProfile:
    def test_profile_requires_token(self, client):
        assert client.get("/api/auth/profile").status_code == 401
        assert client.get("/api/auth/profile", headers=bearer("forged.token")).status_code == 401

    def test_profile_returns_public_user(self, client):
        body = register(client, "a@b.com", "secret1", firstName="Ada", lastName="Lovelace")
        resp = client.get("/api/auth/profile", headers=bearer(body["access_token"]))
        assert resp.status_code == 200
        profile = resp.json()
        assert profile["id"] == body["user"]["id"]
        assert profile["lastName"] == "Lovelace"
        assert "password" not in profile

    def test_token_for_deleted_user_rejected(self, client):
        body = register(client, "a@b.com", "secret1")
        token = body["access_token"]
        assert client.delete(f"/api/users/{body['user']['id']}", headers=bearer(token)).status_code == 204
        assert client.get("/api/auth/profile", headers=bearer(token)).status_code == 401


class TestChangePassword:
    def test_change_password(self, client):
        token = register(client, "a@b.com", "secret1")["access_token"]

        resp = client.post(
            "/api/auth/change-password",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
            headers=bearer(token),
        )
        assert resp.status_code == 200
        assert resp.json() == {"message": "Password changed successfully"}

        old = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})
        new = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret2"})
        assert old.status_code == 401
        assert new.status_code == 200
        # existing tokens survive a password change
        assert client.get("/api/auth/profile", headers=bearer(token)).status_code == 200

    def test_wrong_current_password(self, client):
        token = register(client, "a@b.com", "secret1")["access_token"]
        resp = client.post(
            "/api/auth/change-password",
            json={"currentPassword": "nope-nope", "newPassword": "secret2"},
            headers=bearer(token),
        )
        assert resp.status_code == 401

    def test_requires_token(self, client):
        resp = client.post(
            "/api/auth/change-password",
            json={"currentPassword": "secret1", "newPassword": "secret2"},
        )
        assert resp.status_code == 401


class TestGoogle:
    def test_redirects_to_consent_screen(self, client):
        resp = client.get("/api/auth/google", follow_redirects=False)
        assert resp.status_code == 307
        location = urlparse(resp.headers["location"])
        assert location.netloc == "accounts.google.com"
        assert parse_qs(location.query)["client_id"] == ["test-client-id"]

    def test_callback_signs_in_and_redirects_with_token(self, client, app):
        google = app.state.google_client
        state = google.create_state()
        profile = profile_from_userinfo({"id": "g-1", "email": "g@b.com", "given_name": "Grace"})

        with patch.object(google, "fetch_profile", AsyncMock(return_value=profile)) as fetch:
            resp = client.get(
                "/api/auth/google/callback",
                params={"code": "the-code", "state": state},
                follow_redirects=False,
            )

        fetch.assert_awaited_once_with("the-code")
        assert resp.status_code == 307
        location = urlparse(resp.headers["location"])
        assert f"{location.scheme}://{location.netloc}{location.path}" == "http://frontend.test/auth/success"
        token = parse_qs(location.query)["token"][0]

        profile_resp = client.get("/api/auth/profile", headers=bearer(token))
        assert profile_resp.json()["googleId"] == "g-1"
        assert profile_resp.json()["firstName"] == "Grace"

    def test_callback_links_mixed_case_account(self, client, app):
        body = register(client, "Grace@Example.COM", "secret1")
        google = app.state.google_client
        profile = profile_from_userinfo({"id": "g-2", "email": "Grace@Example.COM"})

        with patch.object(google, "fetch_profile", AsyncMock(return_value=profile)):
            resp = client.get(
                "/api/auth/google/callback",
                params={"code": "the-code", "state": google.create_state()},
                follow_redirects=False,
            )

        token = parse_qs(urlparse(resp.headers["location"]).query)["token"][0]
        linked = client.get("/api/auth/profile", headers=bearer(token)).json()
        assert linked["id"] == body["user"]["id"]
        assert linked["googleId"] == "g-2"

    def test_callback_rejects_bad_state(self, client):
        resp = client.get(
            "/api/auth/google/callback",
            params={"code": "the-code", "state": "forged"},
            follow_redirects=False,
        )
        assert resp.status_code == 400

    def test_unconfigured_google_is_unavailable(self, settings):
        from fastapi.testclient import TestClient

        from main import create_app

        blank = settings.model_copy(update={"google_client_id": "", "google_client_secret": ""})
        with TestClient(create_app(blank)) as client:
            assert client.get("/api/auth/google", follow_redirects=False).status_code == 503
