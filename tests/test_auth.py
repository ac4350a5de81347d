"""Tests for authentication endpoints."""

from datetime import timedelta
from typing import Any

import pytest
from httpx import AsyncClient

from pinboard.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_access_token,
    verify_password,
)

# ─────────────────────────────────────────────────────────────────────────────
# Registration Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_register_success(client: AsyncClient) -> None:
    """Test successful user registration."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "alice",
            "email": "alice@x.com",
            "password": "secret1",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["username"] == "alice"
    assert data["email"] == "alice@x.com"
    assert data["token"]
    assert data["tokenType"] == "bearer"
    assert "password" not in data
    assert "hashedPassword" not in data
    assert verify_access_token(data["token"]) == data["id"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test registration with an existing email fails."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "someone_else",
            "email": alice["email"],
            "password": "secret1",
        },
    )

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "DUPLICATE_RESOURCE"
    assert body["error"] == "Username or email already exists"


@pytest.mark.asyncio
async def test_register_duplicate_email_is_case_insensitive(
    client: AsyncClient, alice: dict[str, Any]
) -> None:
    """Test that emails differing only in case collide."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "alice2",
            "email": alice["email"].upper(),
            "password": "secret1",
        },
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test registration with an existing username fails."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "alice",
            "email": "other@example.com",
            "password": "secret1",
        },
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_invalid_username(client: AsyncClient) -> None:
    """Test usernames are restricted to letters, digits and underscores."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "not valid!",
            "email": "user@example.com",
            "password": "secret1",
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert any(e["field"] == "username" for e in body["errors"])


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient) -> None:
    """Test registration with a password under 6 characters fails."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "shorty",
            "email": "shorty@example.com",
            "password": "12345",
        },
    )

    assert response.status_code == 400
    assert any(e["field"] == "password" for e in response.json()["errors"])


@pytest.mark.asyncio
async def test_register_invalid_email(client: AsyncClient) -> None:
    """Test registration with an invalid email fails."""
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "mailless",
            "email": "not-an-email",
            "password": "secret1",
        },
    )

    assert response.status_code == 400


# ─────────────────────────────────────────────────────────────────────────────
# Login Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test a token from login identifies the registered user."""
    response = await client.post(
        "/api/auth/login",
        json={"email": alice["email"], "password": "secret1"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == alice["id"]
    assert data["username"] == "alice"
    assert data["expiresIn"] == 7 * 24 * 3600
    assert verify_access_token(data["token"]) == alice["id"]


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(
    client: AsyncClient, alice: dict[str, Any]
) -> None:
    """Test login accepts the email in any case."""
    response = await client.post(
        "/api/auth/login",
        json={"email": "ALICE@example.com", "password": "secret1"},
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test login with the wrong password fails without a token."""
    response = await client.post(
        "/api/auth/login",
        json={"email": alice["email"], "password": "wrong-password"},
    )

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "INVALID_CREDENTIALS"
    assert body["error"] == "Invalid email or password"
    assert "data" not in body


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient) -> None:
    """Test login with an unknown email gives the same error."""
    response = await client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "secret1"},
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


# ─────────────────────────────────────────────────────────────────────────────
# Current User Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_me_returns_user_and_token(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test /me resolves the token to its user."""
    response = await client.get("/api/auth/me", headers=alice["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == alice["id"]
    assert data["email"] == alice["email"]
    assert data["token"] == alice["token"]


@pytest.mark.asyncio
async def test_me_without_token(client: AsyncClient) -> None:
    """Test /me requires a token."""
    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "No token provided"
    assert body["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_me_with_invalid_token(client: AsyncClient) -> None:
    """Test /me rejects a malformed token."""
    response = await client.get(
        "/api/auth/me",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Invalid token"
    assert body["code"] == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_me_with_expired_token(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test /me rejects an expired token."""
    token = create_access_token(alice["id"], expires_delta=timedelta(seconds=-10))

    response = await client.get(
        "/api/auth/me",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_for_missing_user(client: AsyncClient) -> None:
    """Test a valid token for a user that does not exist is rejected."""
    token = create_access_token(9999)

    response = await client.get(
        "/api/auth/me",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


# ─────────────────────────────────────────────────────────────────────────────
# Security Helpers
# ─────────────────────────────────────────────────────────────────────────────


def test_password_hash_roundtrip() -> None:
    """Test a hash verifies only its own password."""
    hashed = hash_password("secret1")

    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)
    assert not verify_password("secret1", "not-a-hash")


def test_decode_token_rejects_tampering() -> None:
    """Test an altered or empty token does not decode."""
    token = create_access_token(1)

    assert decode_token(token) is not None
    assert decode_token(token + "x") is None
    assert verify_access_token("") is None
