"""Tests for Clerk session token verification and auth dependencies."""

import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt

from ideavault.core.auth import get_current_user, require_user, verify_session_token
from ideavault.core.config import get_settings


@pytest.fixture(scope="module")
def rsa_keys():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture
def jwt_key(monkeypatch, rsa_keys):
    monkeypatch.setenv("CLERK_JWT_KEY", rsa_keys[1])
    get_settings.cache_clear()
    return rsa_keys[0]


def _token(private_pem, **claims):
    now = int(time.time())
    payload = {"sub": "user_abc", "iat": now, "exp": now + 300, **claims}
    return jwt.encode(payload, private_pem, algorithm="RS256")


def test_valid_token_returns_claims(jwt_key):
    claims = verify_session_token(_token(jwt_key))
    assert claims["sub"] == "user_abc"


def test_expired_token_rejected(jwt_key):
    with pytest.raises(JWTError):
        verify_session_token(_token(jwt_key, exp=int(time.time()) - 10))


def test_token_signed_with_other_key_rejected(jwt_key):
    other = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    other_pem = other.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()

    with pytest.raises(JWTError):
        verify_session_token(_token(other_pem))


def test_unauthorized_party_rejected(jwt_key, monkeypatch):
    monkeypatch.setenv("CLERK_AUTHORIZED_PARTIES", "http://localhost:3000, https://ideavault.app")
    get_settings.cache_clear()

    assert verify_session_token(_token(jwt_key, azp="https://ideavault.app"))["sub"] == "user_abc"
    with pytest.raises(JWTError, match="Unauthorized party"):
        verify_session_token(_token(jwt_key, azp="https://evil.example"))


def test_missing_key_rejects_everything(rsa_keys, monkeypatch):
    monkeypatch.setenv("CLERK_JWT_KEY", "")
    get_settings.cache_clear()

    with pytest.raises(JWTError, match="CLERK_JWT_KEY"):
        verify_session_token(_token(rsa_keys[0]))


@pytest.mark.asyncio
async def test_get_current_user_builds_context(jwt_key):
    token = _token(jwt_key)
    auth = await get_current_user(HTTPAuthorizationCredentials(scheme="Bearer", credentials=token))

    assert auth.user_id == "user_abc"
    assert auth.token == token


@pytest.mark.asyncio
async def test_get_current_user_returns_none_for_bad_token(jwt_key):
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="not-a-jwt")
    assert await get_current_user(credentials) is None
    assert await get_current_user(None) is None


@pytest.mark.asyncio
async def test_require_user_raises_401():
    with pytest.raises(HTTPException) as exc_info:
        await require_user(None)
    assert exc_info.value.status_code == 401


def test_protected_route_without_token_is_401(anon_client):
    response = anon_client.get("/api/milestones")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
