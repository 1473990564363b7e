"""User administration routes (admin only)."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from analise_tributaria.api.dependencies import AdminUser, get_user_service
from analise_tributaria.api.schemas.companies import CompanyResponse
from analise_tributaria.api.schemas.users import CreateUserRequest, UserResponse
from analise_tributaria.services.user_service import CreateUserInput, UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Payload invalido"},
        409: {"description": "Usuario ja existe"},
    },
)
def create_user(
    payload: CreateUserRequest,
    _: AdminUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a user, optionally with administrator rights."""

    user = service.create_user(
        CreateUserInput(
            username=payload.username,
            password=payload.password,
            is_admin=payload.is_admin,
        )
    )
    return UserResponse.from_model(user)


@router.get("", response_model=list[UserResponse])
def list_users(
    _: AdminUser,
    service: Annotated[UserService, Depends(get_user_service)],
    q: Annotated[str | None, Query(max_length=100)] = None,
) -> list[UserResponse]:
    """List users ordered by username, optionally filtered by substring."""

    return [UserResponse.from_model(user) for user in service.list_users(q)]


@router.get("/{user_id}/companies", response_model=list[CompanyResponse])
def list_user_companies(
    user_id: Annotated[int, Path(ge=1)],
    _: AdminUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[CompanyResponse]:
    """List companies a user has been granted access to."""

    return [
        CompanyResponse.from_model(company)
        for company in service.list_companies(user_id)
    ]


@router.put(
    "/{user_id}/companies/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Usuario ou empresa nao encontrado"}},
)
def grant_company(
    user_id: Annotated[int, Path(ge=1)],
    company_id: Annotated[int, Path(ge=1)],
    _: AdminUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Associate a user with a company."""

    service.grant_company(user_id=user_id, company_id=company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}/companies/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Usuario ou empresa nao encontrado"}},
)
def revoke_company(
    user_id: Annotated[int, Path(ge=1)],
    company_id: Annotated[int, Path(ge=1)],
    _: AdminUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Remove the association between a user and a company."""

    service.revoke_company(user_id=user_id, company_id=company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
