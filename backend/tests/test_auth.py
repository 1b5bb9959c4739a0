from urllib.parse import parse_qs, urlparse

import pytest

from conftest import PASSWORD, signup


class TestRegisterAndLogin:
    async def test_first_user_is_admin_later_users_are_viewers(self, client, admin, viewer):
        assert admin["user"]["role"] == "admin"
        assert viewer["user"]["role"] == "viewer"

    async def test_duplicate_email_is_rejected(self, client, admin):
        response = await client.post(
            "/api/auth/register",
            json={"email": "ADMIN@example.com", "password": PASSWORD, "full_name": "Again"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "ALREADY_EXISTS"

    @pytest.mark.parametrize("payload, message", [
        ({"password": PASSWORD, "full_name": "No Email"}, "Email is required"),
        ({"email": "short@example.com", "password": "short", "full_name": "Short"},
         "Password must be between 8 and 128 characters"),
        ({"email": "blank@example.com", "password": PASSWORD, "full_name": "  "}, "Full Name is required"),
    ])
    async def test_register_field_messages(self, client, payload, message):
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == message

    async def test_wrong_password_is_unauthorized(self, client, admin):
        response = await client.post(
            "/api/auth/login", json={"email": "admin@example.com", "password": "not-the-password"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid email or password"

    async def test_me_requires_authentication(self, client):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_garbage_token_is_unauthorized(self, client):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid or expired token"

    async def test_me_returns_current_user(self, client, admin, admin_headers):
        response = await client.get("/api/auth/me", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "admin@example.com"


class TestSession:
    async def test_session_without_credentials_has_no_user(self, client):
        response = await client.get("/api/auth/session")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"user": None}}

    async def test_session_from_bearer_header(self, client, admin, admin_headers):
        response = await client.get("/api/auth/session", headers=admin_headers)
        assert response.json()["data"]["user"]["id"] == admin["user"]["id"]

    async def test_session_from_cookie(self, client, admin):
        client.cookies.set("access_token", admin["tokens"]["access_token"])
        response = await client.get("/api/auth/session")
        assert response.json()["data"]["user"]["id"] == admin["user"]["id"]

    async def test_refresh_rotates_tokens(self, client, admin):
        refresh_token = admin["tokens"]["refresh_token"]
        response = await client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        assert response.json()["data"]["refresh_token"] != refresh_token

        # The old refresh token was revoked by the rotation
        client.cookies.clear()
        response = await client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 401

    async def test_logout_revokes_refresh_token(self, client, admin, admin_headers):
        refresh_token = admin["tokens"]["refresh_token"]
        response = await client.post(
            "/api/auth/logout", json={"refresh_token": refresh_token}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

        client.cookies.clear()
        response = await client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 401


class TestPasswordReset:
    @pytest.fixture
    def sent_links(self, monkeypatch):
        links: list[str] = []

        async def fake_send(settings, user, reset_link):
            links.append(reset_link)

        monkeypatch.setattr("procurement.auth.service.send_password_reset_email", fake_send)
        return links

    async def test_unknown_email_still_succeeds(self, client, admin, sent_links):
        response = await client.post(
            "/api/auth/forgot-password", json={"email": "nobody@example.com"}
        )
        assert response.status_code == 200
        assert sent_links == []

    async def test_reset_flow(self, client, admin, sent_links):
        response = await client.post(
            "/api/auth/forgot-password", json={"email": "admin@example.com"}
        )
        assert response.status_code == 200
        assert len(sent_links) == 1

        link = urlparse(sent_links[0])
        assert f"{link.scheme}://{link.netloc}" == "http://app.test"
        assert link.path == "/reset-password"
        token = parse_qs(link.query)["token"][0]

        response = await client.post(
            "/api/auth/reset-password", json={"token": token, "password": "brand-new-password"}
        )
        assert response.status_code == 200

        response = await client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "password": "brand-new-password"},
        )
        assert response.status_code == 200

        # A reset token works once
        response = await client.post(
            "/api/auth/reset-password", json={"token": token, "password": "another-password"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Reset link is invalid or has already been used"
        )


class TestRoles:
    async def test_only_admin_lists_users(self, client, admin_headers, viewer):
        response = await client.get("/api/auth/users", headers=viewer["headers"])
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

        response = await client.get("/api/auth/users", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    async def test_admin_changes_role(self, client, admin_headers):
        account = await signup(client, "someone@example.com")
        response = await client.put(
            f"/api/auth/users/{account['user']['id']}/role",
            json={"role": "accountant"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "accountant"
