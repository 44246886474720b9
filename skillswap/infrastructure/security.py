"""Credentials — password hashing and access tokens.

Invariants:
    - Passwords stored as "scrypt$<salt_b64>$<hash_b64>", never in clear
    - verify_password never raises on malformed hashes (returns False)
    - Access tokens are JWTs with sub (user id), typ="access", iat, exp
    - decode_access_token raises AuthenticationError for any invalid token

Design Decisions:
    - scrypt from hashlib: memory-hard KDF available in the standard library
    - python-jose for JWT encode/decode; expiry enforced by jose on decode
"""

import base64
import hashlib
import hmac
import os
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from skillswap.config import get_settings
from skillswap.core.errors import AuthenticationError

_SCRYPT_N = 16384
_SCRYPT_R = 8
_SCRYPT_P = 1
_ALGO = "scrypt"


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"), salt=salt, n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P,
    )


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = _derive(password, salt)
    return "$".join((
        _ALGO,
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(digest).decode("ascii"),
    ))


def verify_password(password: str, stored: str) -> bool:
    try:
        algo, salt_b64, hash_b64 = stored.split("$")
        if algo != _ALGO:
            return False
        salt = base64.b64decode(salt_b64.encode("ascii"))
        expected = base64.b64decode(hash_b64.encode("ascii"))
    except (ValueError, TypeError):
        return False
    return hmac.compare_digest(_derive(password, salt), expected)


def create_access_token(user_id: UUID, expires_minutes: int | None = None) -> str:
    settings = get_settings()
    minutes = expires_minutes or settings.access_token_expire_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "typ": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Return the user id carried by a valid access token."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token", "INVALID_TOKEN") from e
    if payload.get("typ") != "access":
        raise AuthenticationError("Invalid token type", "INVALID_TOKEN")
    try:
        return UUID(payload.get("sub", ""))
    except (ValueError, TypeError) as e:
        raise AuthenticationError("Invalid token subject", "INVALID_TOKEN") from e
