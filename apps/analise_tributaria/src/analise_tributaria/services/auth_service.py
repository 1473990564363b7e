"""Business service for login and bearer token resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import jwt

from analise_tributaria.core.security import (
    TokenClaims,
    decode_token,
    issue_token,
    verify_password,
)
from analise_tributaria.core.settings import Settings
from analise_tributaria.db.models.user import User
from analise_tributaria.domain.errors import (
    AuthenticationError,
    InvalidRequestError,
    compose_error_message,
)

logger = logging.getLogger(__name__)


class UserLookupProtocol(Protocol):
    """User repository contract consumed by authentication."""

    def get(self, user_id: int) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...


@dataclass(frozen=True, slots=True)
class LoginResult:
    token: str
    user: User


class AuthService:
    """Checks credentials and turns bearer tokens back into users."""

    def __init__(
        self,
        *,
        user_repository: UserLookupProtocol,
        settings: Settings,
    ) -> None:
        self._user_repository = user_repository
        self._settings = settings

    def login(self, *, username: str, password: str) -> LoginResult:
        username = username.strip()
        if not username or not password:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Username and password are required.",
                    action="Fill in both fields and try again.",
                )
            )

        user = self._user_repository.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("login_failed", extra={"username": username})
            raise AuthenticationError(
                message=compose_error_message(
                    cause="Invalid username or password.",
                    action="Check your credentials and try again.",
                )
            )

        token = issue_token(
            TokenClaims(
                user_id=user.id,
                username=user.username,
                is_admin=user.is_admin,
            ),
            self._settings,
        )
        logger.info("login_succeeded", extra={"user_id": user.id})
        return LoginResult(token=token, user=user)

    def resolve_user(self, token: str) -> User:
        """Return the user behind a bearer token."""

        try:
            claims = decode_token(token, self._settings)
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError() from exc

        user = self._user_repository.get(claims.user_id)
        if user is None:
            raise AuthenticationError()
        return user
