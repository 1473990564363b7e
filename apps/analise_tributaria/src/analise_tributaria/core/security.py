"""Password hashing and bearer token helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from analise_tributaria.core.settings import Settings

# bcrypt only considers the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True, slots=True)
class TokenClaims:
    user_id: int
    username: str
    is_admin: bool


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, *, rounds: int = 10) -> str:
    return bcrypt.hashpw(
        _password_bytes(password),
        bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


def issue_token(
    claims: TokenClaims,
    settings: Settings,
    *,
    now: datetime | None = None,
) -> str:
    """Sign a JWT carrying the user identity and admin flag."""

    issued_at = now or datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "sub": str(claims.user_id),
        "username": claims.username,
        "is_admin": claims.is_admin,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expires_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> TokenClaims:
    """Verify signature and expiry; raises ``jwt.InvalidTokenError`` otherwise."""

    payload = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("Token subject is not a user id.") from exc
    return TokenClaims(
        user_id=user_id,
        username=str(payload.get("username", "")),
        is_admin=bool(payload.get("is_admin", False)),
    )
