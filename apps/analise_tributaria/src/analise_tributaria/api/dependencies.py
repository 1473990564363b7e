"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from analise_tributaria.core.settings import Settings, get_settings
from analise_tributaria.db.models.user import User
from analise_tributaria.db.session import get_db_session
from analise_tributaria.domain.errors import (
    AuthenticationError,
    PermissionDeniedError,
)
from analise_tributaria.repositories.company_repository import CompanyRepository
from analise_tributaria.repositories.nbs_repository import NbsRepository
from analise_tributaria.repositories.upload_item_repository import (
    UploadItemRepository,
)
from analise_tributaria.repositories.user_repository import UserRepository
from analise_tributaria.services.auth_service import AuthService
from analise_tributaria.services.company_service import CompanyService
from analise_tributaria.services.ingestion_service import IngestionService
from analise_tributaria.services.nbs_service import NbsService
from analise_tributaria.services.report_service import ReportService
from analise_tributaria.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(
    session: Annotated[Session, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Build auth service with per-request session."""

    return AuthService(user_repository=UserRepository(session), settings=settings)


def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Resolve the bearer token of the request into a user."""

    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return auth_service.resolve_user(credentials.credentials)


def require_admin(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Reject non-admin users."""

    if not user.is_admin:
        raise PermissionDeniedError()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]


def get_user_service(
    session: Annotated[Session, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    """Build user administration service with per-request session."""

    return UserService(
        user_repository=UserRepository(session),
        company_repository=CompanyRepository(session),
        session=session,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_company_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> CompanyService:
    """Build company service with per-request session."""

    return CompanyService(
        company_repository=CompanyRepository(session),
        session=session,
    )


def get_ingestion_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> IngestionService:
    """Build spreadsheet ingestion service with per-request session."""

    return IngestionService(
        upload_item_repository=UploadItemRepository(session),
        session=session,
    )


def get_report_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> ReportService:
    """Build latest-batch report service."""

    return ReportService(upload_item_repository=UploadItemRepository(session))


def get_nbs_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> NbsService:
    """Build NBS lookup service with per-request session."""

    return NbsService(nbs_repository=NbsRepository(session), session=session)
