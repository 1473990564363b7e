from __future__ import annotations

import io
from collections.abc import Callable, Generator, Sequence
from typing import Any

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from analise_tributaria.api.app import create_app
from analise_tributaria.core.security import hash_password
from analise_tributaria.db.base import Base, import_orm_models
from analise_tributaria.db.models.company import Company
from analise_tributaria.db.models.user import User
from analise_tributaria.db.models.user_company import UserCompany
from analise_tributaria.db.session import get_db_session

DEFAULT_HEADER = (
    "NCM",
    "CFOP",
    "cClasstrib_sugerido",
    "qtd_registros",
    "status",
    "descricao",
    "nome_produto",
)

WorkbookBuilder = Callable[..., bytes]


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app) as test_client:
        yield test_client


def seed_user(
    session: Session,
    username: str,
    password: str,
    *,
    is_admin: bool = False,
) -> int:
    user = User(
        username=username,
        password_hash=hash_password(password, rounds=4),
        is_admin=is_admin,
    )
    session.add(user)
    session.commit()
    return user.id


@pytest.fixture
def admin_id(sqlite_session_factory: sessionmaker[Session]) -> int:
    with sqlite_session_factory() as session:
        return seed_user(session, "admin", "admin123", is_admin=True)


@pytest.fixture
def analyst_id(sqlite_session_factory: sessionmaker[Session]) -> int:
    with sqlite_session_factory() as session:
        return seed_user(session, "analista", "senha123")


def login_headers(client: TestClient, username: str, password: str) -> dict[str, str]:
    response = client.post(
        "/v1/auth/login",
        json={"username": username, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client: TestClient, admin_id: int) -> dict[str, str]:
    return login_headers(client, "admin", "admin123")


@pytest.fixture
def analyst_headers(client: TestClient, analyst_id: int) -> dict[str, str]:
    return login_headers(client, "analista", "senha123")


@pytest.fixture
def company_id(sqlite_session_factory: sessionmaker[Session]) -> int:
    with sqlite_session_factory() as session:
        company = Company(name="Mercado Central", cnpj="12.345.678/0001-90")
        session.add(company)
        session.commit()
        return company.id


@pytest.fixture
def grant_access(
    sqlite_session_factory: sessionmaker[Session],
) -> Callable[[int, int], None]:
    def _grant(user_id: int, company_id: int) -> None:
        with sqlite_session_factory() as session:
            session.add(UserCompany(user_id=user_id, company_id=company_id))
            session.commit()

    return _grant


def _build_workbook(
    rows: Sequence[Sequence[Any]],
    *,
    header: Sequence[str] = DEFAULT_HEADER,
    company_rows: Sequence[Sequence[Any]] | None = None,
    company_sheet_name: str = "Empresa",
) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Consolidado"
    sheet.append(list(header))
    for row in rows:
        sheet.append(list(row))

    if company_rows is not None:
        company_sheet = workbook.create_sheet(company_sheet_name)
        for row in company_rows:
            company_sheet.append(list(row))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def build_workbook() -> WorkbookBuilder:
    return _build_workbook
