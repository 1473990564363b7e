"""Business service for companies and company-level access checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from analise_tributaria.db.models.company import Company
from analise_tributaria.db.models.user import User
from analise_tributaria.domain.errors import (
    CompanyNotFoundError,
    InvalidRequestError,
    PermissionDeniedError,
    compose_error_message,
)

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class CompanyRepositoryProtocol(Protocol):
    def get(self, company_id: int) -> Company | None: ...

    def list_all(self) -> list[Company]: ...

    def list_for_user(self, user_id: int) -> list[Company]: ...

    def add(self, company: Company) -> Company: ...

    def delete(self, company: Company) -> None: ...

    def is_associated(self, *, user_id: int, company_id: int) -> bool: ...


@dataclass(slots=True, frozen=True)
class CreateCompanyInput:
    name: str
    cnpj: str
    address: str | None = None


class CompanyService:
    """Registers companies and decides who may read or feed them."""

    def __init__(
        self,
        *,
        company_repository: CompanyRepositoryProtocol,
        session: SessionProtocol,
    ) -> None:
        self._company_repository = company_repository
        self._session = session

    def create_company(self, payload: CreateCompanyInput) -> Company:
        name = payload.name.strip()
        cnpj = payload.cnpj.strip()
        if not name or not cnpj:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Company name and CNPJ are required.",
                    action="Fill in both fields and try again.",
                )
            )
        address = payload.address.strip() if payload.address else None

        try:
            company = self._company_repository.add(
                Company(name=name, cnpj=cnpj, address=address or None)
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("company_created", extra={"company_id": company.id})
        return company

    def list_visible(self, user: User) -> list[Company]:
        """Admins see every company; other users only their associated ones."""

        if user.is_admin:
            return self._company_repository.list_all()
        return self._company_repository.list_for_user(user.id)

    def delete_company(self, company_id: int) -> None:
        company = self._get(company_id)
        try:
            self._company_repository.delete(company)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("company_deleted", extra={"company_id": company_id})

    def require_access(self, user: User, company_id: int) -> Company:
        """Return the company when ``user`` may work with it."""

        company = self._get(company_id)
        if user.is_admin or self._company_repository.is_associated(
            user_id=user.id, company_id=company_id
        ):
            return company
        raise PermissionDeniedError(
            message=compose_error_message(
                cause="User is not associated with this company.",
                action="Ask an administrator to grant access to the company.",
            ),
            details={"company_id": company_id},
        )

    def _get(self, company_id: int) -> Company:
        company = self._company_repository.get(company_id)
        if company is None:
            raise CompanyNotFoundError(details={"company_id": company_id})
        return company
