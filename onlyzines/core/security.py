"""Password hashing and signed tokens for OnlyZines accounts."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt

from onlyzines.core.config import Settings, get_settings

PBKDF2_SCHEME = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 120_000
PBKDF2_SALT_BYTES = 16

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _urlsafe_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _urlsafe_decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


# =============================================================================
# Account passwords
# =============================================================================


def create_password_hash(password: str) -> str:
    """Hash an account password as ``scheme$iterations$salt$digest``."""

    if not password:
        raise ValueError("Password must not be empty")

    salt = secrets.token_bytes(PBKDF2_SALT_BYTES)
    digest = _pbkdf2(password, salt, PBKDF2_ITERATIONS)
    return "$".join(
        (PBKDF2_SCHEME, str(PBKDF2_ITERATIONS), _urlsafe_encode(salt), _urlsafe_encode(digest))
    )


def verify_password(password: str, stored_hash: str) -> bool:
    parts = stored_hash.split("$") if stored_hash else []
    if len(parts) != 4 or parts[0] != PBKDF2_SCHEME:
        return False

    try:
        iterations = int(parts[1])
        salt = _urlsafe_decode(parts[2])
        expected = _urlsafe_decode(parts[3])
    except ValueError:
        return False
    return hmac.compare_digest(_pbkdf2(password, salt, iterations), expected)


# =============================================================================
# Zine access passwords
# =============================================================================


def hash_zine_password(password: str, *, settings: Settings | None = None) -> str:
    """Hash a zine access password with bcrypt."""

    rounds = (settings or get_settings()).zine_password_bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_zine_password(password: str, stored_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# =============================================================================
# Tokens (HS256 JWT)
# =============================================================================


def _json_segment(data: dict[str, Any]) -> str:
    return _urlsafe_encode(json.dumps(data, separators=(",", ":")).encode("utf-8"))


def _signature(message: str, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message.encode("ascii"), hashlib.sha256).digest()


def encode_token(
    claims: dict[str, Any],
    *,
    secret: str,
    expires_delta: timedelta,
    algorithm: str = "HS256",
) -> str:
    """Sign ``claims`` together with ``iat``, ``exp`` and a random ``jti``."""

    issued_at = datetime.now(timezone.utc)
    body = dict(claims)
    body["iat"] = int(issued_at.timestamp())
    body["exp"] = int((issued_at + expires_delta).timestamp())
    # Two tokens minted in the same second must still differ
    body["jti"] = secrets.token_urlsafe(8)

    message = f"{_json_segment({'alg': algorithm, 'typ': 'JWT'})}.{_json_segment(body)}"
    return f"{message}.{_urlsafe_encode(_signature(message, secret))}"


def decode_token(token: str, *, secret: str) -> dict[str, Any]:
    """Verify a token produced by ``encode_token`` and return its claims.

    Raises ``ValueError`` describing the first check that failed.
    """

    message, _, signature = token.rpartition(".")
    if message.count(".") != 1:
        raise ValueError("Token structure invalid")

    try:
        signature_bytes = _urlsafe_decode(signature)
    except ValueError as exc:
        raise ValueError("Token signature malformed") from exc
    if not hmac.compare_digest(signature_bytes, _signature(message, secret)):
        raise ValueError("Token signature mismatch")

    try:
        claims = json.loads(_urlsafe_decode(message.split(".")[1]))
    except ValueError as exc:
        raise ValueError("Token payload malformed") from exc
    if not isinstance(claims, dict) or "exp" not in claims:
        raise ValueError("Token missing expiration")
    if datetime.now(timezone.utc).timestamp() >= int(claims["exp"]):
        raise ValueError("Token expired")
    return claims


def create_access_token(
    *,
    user_id: int,
    email: str,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Short-lived token authenticating API calls."""

    config = settings or get_settings()
    lifetime = expires_delta
    if lifetime is None:
        lifetime = timedelta(minutes=config.jwt_access_token_expires_minutes)
    return encode_token(
        {"sub": str(user_id), "email": email, "type": ACCESS_TOKEN_TYPE},
        secret=config.jwt_access_secret,
        expires_delta=lifetime,
        algorithm=config.jwt_algorithm,
    )


def create_refresh_token(
    *,
    user_id: int,
    token_id: int,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Long-lived token bound to a persisted ``RefreshToken`` row via ``tid``."""

    config = settings or get_settings()
    lifetime = expires_delta
    if lifetime is None:
        lifetime = timedelta(days=config.jwt_refresh_token_expires_days)
    return encode_token(
        {"sub": str(user_id), "tid": token_id, "type": REFRESH_TOKEN_TYPE},
        secret=config.jwt_refresh_secret,
        expires_delta=lifetime,
        algorithm=config.jwt_algorithm,
    )


def _decode_typed(token: str, *, secret: str, token_type: str, error: str) -> dict[str, Any]:
    claims = decode_token(token, secret=secret)
    if claims.get("type") != token_type:
        raise ValueError(error)
    return claims


def decode_access_token(token: str, *, settings: Settings | None = None) -> dict[str, Any]:
    config = settings or get_settings()
    return _decode_typed(
        token, secret=config.jwt_access_secret, token_type=ACCESS_TOKEN_TYPE, error="Not an access token"
    )


def decode_refresh_token(token: str, *, settings: Settings | None = None) -> dict[str, Any]:
    config = settings or get_settings()
    return _decode_typed(
        token, secret=config.jwt_refresh_secret, token_type=REFRESH_TOKEN_TYPE, error="Not a refresh token"
    )


def refresh_token_expiry(settings: Settings | None = None) -> datetime:
    """Absolute expiry stored alongside a new refresh token row."""

    days = (settings or get_settings()).jwt_refresh_token_expires_days
    return datetime.now(timezone.utc) + timedelta(days=days)
