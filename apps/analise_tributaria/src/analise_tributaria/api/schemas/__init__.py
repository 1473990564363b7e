"""API request and response schemas."""

from analise_tributaria.api.schemas.companies import (
    CompanyResponse,
    CreateCompanyRequest,
)
from analise_tributaria.api.schemas.nbs import NbsListResponse
from analise_tributaria.api.schemas.reports import (
    ConsolidationReportResponse,
    GroupPageResponse,
)
from analise_tributaria.api.schemas.users import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
)

__all__ = [
    "CompanyResponse",
    "ConsolidationReportResponse",
    "CreateCompanyRequest",
    "CreateUserRequest",
    "GroupPageResponse",
    "LoginRequest",
    "LoginResponse",
    "NbsListResponse",
    "UserResponse",
]
