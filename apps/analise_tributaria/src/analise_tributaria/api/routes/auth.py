"""Authentication routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from analise_tributaria.api.dependencies import CurrentUser, get_auth_service
from analise_tributaria.api.schemas.users import (
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from analise_tributaria.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Usuario e senha sao obrigatorios"},
        401: {"description": "Usuario ou senha invalidos"},
    },
)
def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """Exchange username and password for a bearer token."""

    result = service.login(username=payload.username, password=payload.password)
    return LoginResponse(token=result.token, user=UserResponse.from_model(result.user))


@router.get("/me", response_model=UserResponse)
def me(user: CurrentUser) -> UserResponse:
    """Return the user behind the bearer token."""

    return UserResponse.from_model(user)
