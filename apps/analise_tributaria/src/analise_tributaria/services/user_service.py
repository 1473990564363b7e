"""Business service for user administration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from analise_tributaria.core.security import hash_password
from analise_tributaria.db.models.company import Company
from analise_tributaria.db.models.user import User
from analise_tributaria.domain.errors import (
    CompanyNotFoundError,
    InvalidRequestError,
    UserAlreadyExistsError,
    UserNotFoundError,
    compose_error_message,
)

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class UserRepositoryProtocol(Protocol):
    def get(self, user_id: int) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...

    def list_users(self, search: str | None = None) -> list[User]: ...

    def add(self, user: User) -> User: ...


class CompanyAssociationProtocol(Protocol):
    def get(self, company_id: int) -> Company | None: ...

    def list_for_user(self, user_id: int) -> list[Company]: ...

    def associate(self, *, user_id: int, company_id: int) -> None: ...

    def dissociate(self, *, user_id: int, company_id: int) -> None: ...


@dataclass(slots=True, frozen=True)
class CreateUserInput:
    username: str
    password: str
    is_admin: bool = False


class UserService:
    """Creates users and manages which companies they can access."""

    def __init__(
        self,
        *,
        user_repository: UserRepositoryProtocol,
        company_repository: CompanyAssociationProtocol,
        session: SessionProtocol,
        bcrypt_rounds: int = 10,
    ) -> None:
        self._user_repository = user_repository
        self._company_repository = company_repository
        self._session = session
        self._bcrypt_rounds = bcrypt_rounds

    def create_user(self, payload: CreateUserInput) -> User:
        username = payload.username.strip()
        if not username or not payload.password:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Username and password are required.",
                    action="Fill in both fields and try again.",
                )
            )
        if self._user_repository.get_by_username(username) is not None:
            raise UserAlreadyExistsError(details={"username": username})

        try:
            user = self._user_repository.add(
                User(
                    username=username,
                    password_hash=hash_password(
                        payload.password, rounds=self._bcrypt_rounds
                    ),
                    is_admin=payload.is_admin,
                )
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "user_created",
            extra={"user_id": user.id, "is_admin": user.is_admin},
        )
        return user

    def list_users(self, search: str | None = None) -> list[User]:
        return self._user_repository.list_users((search or "").strip() or None)

    def ensure_admin(self, *, username: str, password: str) -> tuple[User, bool]:
        """Create the default administrator when missing.

        Returns the user and whether it was created by this call.
        """

        existing = self._user_repository.get_by_username(username.strip())
        if existing is not None:
            return existing, False
        user = self.create_user(
            CreateUserInput(username=username, password=password, is_admin=True)
        )
        return user, True

    def list_companies(self, user_id: int) -> list[Company]:
        self._get_user(user_id)
        return self._company_repository.list_for_user(user_id)

    def grant_company(self, *, user_id: int, company_id: int) -> None:
        self._get_user(user_id)
        self._get_company(company_id)
        try:
            self._company_repository.associate(user_id=user_id, company_id=company_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "company_access_granted",
            extra={"user_id": user_id, "company_id": company_id},
        )

    def revoke_company(self, *, user_id: int, company_id: int) -> None:
        self._get_user(user_id)
        self._get_company(company_id)
        try:
            self._company_repository.dissociate(user_id=user_id, company_id=company_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "company_access_revoked",
            extra={"user_id": user_id, "company_id": company_id},
        )

    def _get_user(self, user_id: int) -> User:
        user = self._user_repository.get(user_id)
        if user is None:
            raise UserNotFoundError(details={"user_id": user_id})
        return user

    def _get_company(self, company_id: int) -> Company:
        company = self._company_repository.get(company_id)
        if company is None:
            raise CompanyNotFoundError(details={"company_id": company_id})
        return company
