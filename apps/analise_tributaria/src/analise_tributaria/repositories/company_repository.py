"""Company and user-company association persistence operations."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from analise_tributaria.db.models.company import Company
from analise_tributaria.db.models.upload_item import UploadItem
from analise_tributaria.db.models.user_company import UserCompany


class CompanyRepository:
    """Repository for companies and the users allowed to see them."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, company_id: int) -> Company | None:
        return self._session.get(Company, company_id)

    def list_all(self) -> list[Company]:
        statement = select(Company).order_by(Company.name.asc(), Company.id.asc())
        return list(self._session.scalars(statement).all())

    def list_for_user(self, user_id: int) -> list[Company]:
        statement = (
            select(Company)
            .join(UserCompany, UserCompany.company_id == Company.id)
            .where(UserCompany.user_id == user_id)
            .order_by(Company.name.asc(), Company.id.asc())
        )
        return list(self._session.scalars(statement).all())

    def add(self, company: Company) -> Company:
        self._session.add(company)
        self._session.flush()
        return company

    def delete(self, company: Company) -> None:
        """Remove a company together with its associations and upload batches."""

        self._session.execute(
            delete(UploadItem).where(UploadItem.company_id == company.id)
        )
        self._session.execute(
            delete(UserCompany).where(UserCompany.company_id == company.id)
        )
        self._session.delete(company)
        self._session.flush()

    def is_associated(self, *, user_id: int, company_id: int) -> bool:
        statement = select(UserCompany.user_id).where(
            UserCompany.user_id == user_id,
            UserCompany.company_id == company_id,
        )
        return self._session.scalar(statement) is not None

    def associate(self, *, user_id: int, company_id: int) -> None:
        if self.is_associated(user_id=user_id, company_id=company_id):
            return
        self._session.add(UserCompany(user_id=user_id, company_id=company_id))
        self._session.flush()

    def dissociate(self, *, user_id: int, company_id: int) -> None:
        self._session.execute(
            delete(UserCompany).where(
                UserCompany.user_id == user_id,
                UserCompany.company_id == company_id,
            )
        )
        self._session.flush()
