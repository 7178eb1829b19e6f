"""Tests for the authentication endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import bearer, signup


def test_signup_returns_user_and_tokens(client: TestClient) -> None:
    body = signup(client, "Editor@Example.com")

    assert body["user"]["email"] == "editor@example.com"
    assert body["user"]["displayName"] == "Editor"
    assert body["tokens"]["accessToken"]
    assert body["tokens"]["refreshToken"]
    assert body["tokens"]["expiresIn"] == 900


def test_signup_rejects_duplicate_email(client: TestClient) -> None:
    signup(client)

    response = client.post(
        "/api/auth/signup",
        json={"email": "editor@example.com", "password": "another-pass"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_EXISTS"


def test_signup_validates_payload(client: TestClient) -> None:
    response = client.post("/api/auth/signup", json={"email": "nope", "password": "short"})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]


def test_login_returns_tokens_for_valid_credentials(client: TestClient) -> None:
    signup(client)

    response = client.post(
        "/api/auth/login",
        json={"email": "editor@example.com", "password": "correct-horse"},
    )

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "editor@example.com"


def test_login_rejects_invalid_credentials(client: TestClient) -> None:
    signup(client)

    response = client.post(
        "/api/auth/login",
        json={"email": "editor@example.com", "password": "wrong-horse"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_refresh_rotates_tokens(client: TestClient) -> None:
    tokens = signup(client)["tokens"]

    first = client.post("/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert first.status_code == 200
    rotated = first.json()["tokens"]
    assert rotated["refreshToken"] != tokens["refreshToken"]

    replay = client.post("/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert replay.status_code == 401
    assert replay.json()["error"]["code"] == "TOKEN_REVOKED"

    again = client.post("/api/auth/refresh", json={"refreshToken": rotated["refreshToken"]})
    assert again.status_code == 200


def test_refresh_rejects_garbage(client: TestClient) -> None:
    response = client.post("/api/auth/refresh", json={"refreshToken": "not-a-token"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


def test_access_token_cannot_be_used_to_refresh(client: TestClient) -> None:
    tokens = signup(client)["tokens"]

    response = client.post("/api/auth/refresh", json={"refreshToken": tokens["accessToken"]})

    assert response.status_code == 401


def test_logout_revokes_refresh_tokens(client: TestClient) -> None:
    tokens = signup(client)["tokens"]

    response = client.post("/api/auth/logout", headers=bearer(tokens))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    refreshed = client.post("/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert refreshed.status_code == 401


def test_logout_without_token_still_succeeds(client: TestClient) -> None:
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_me_returns_profile(client: TestClient) -> None:
    tokens = signup(client)["tokens"]

    response = client.get("/api/auth/me", headers=bearer(tokens))

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "editor@example.com"
    assert "createdAt" in user


def test_me_requires_authentication(client: TestClient) -> None:
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_me_rejects_invalid_token(client: TestClient) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401
