"""Company routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from analise_tributaria.api.dependencies import (
    AdminUser,
    CurrentUser,
    get_company_service,
)
from analise_tributaria.api.schemas.companies import (
    CompanyResponse,
    CreateCompanyRequest,
)
from analise_tributaria.services.company_service import (
    CompanyService,
    CreateCompanyInput,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=list[CompanyResponse])
def list_companies(
    user: CurrentUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> list[CompanyResponse]:
    """List companies visible to the authenticated user."""

    return [CompanyResponse.from_model(item) for item in service.list_visible(user)]


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Nome e CNPJ sao obrigatorios"}},
)
def create_company(
    payload: CreateCompanyRequest,
    _: AdminUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyResponse:
    """Register a company."""

    company = service.create_company(
        CreateCompanyInput(
            name=payload.name,
            cnpj=payload.cnpj,
            address=payload.address,
        )
    )
    return CompanyResponse.from_model(company)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Empresa nao encontrada"}},
)
def delete_company(
    company_id: Annotated[int, Path(ge=1)],
    _: AdminUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> Response:
    """Delete a company with its associations and upload history."""

    service.delete_company(company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
