"""Per-request AMO API tokens."""

from __future__ import annotations

import time
from uuid import uuid4

import jwt  # PyJWT

from amo_release.amo.model import Credentials
from amo_release.amo.timeouts import TOKEN_LIFETIME_SECONDS

__all__ = ["sign_token", "authorization_header"]


def sign_token(credentials: Credentials, *, now: float | None = None) -> str:
    """Sign a short-lived HS256 token for exactly one request."""
    issued_at = int(time.time() if now is None else now)
    claims = {
        "iss": credentials.api_key,
        "jti": uuid4().hex,
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME_SECONDS,
    }
    return jwt.encode(claims, credentials.api_secret, algorithm="HS256")


def authorization_header(credentials: Credentials) -> str:
    return f"JWT {sign_token(credentials)}"
