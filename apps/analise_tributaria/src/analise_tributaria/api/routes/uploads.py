"""Spreadsheet upload route."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from analise_tributaria.api.dependencies import (
    CurrentUser,
    get_company_service,
    get_ingestion_service,
)
from analise_tributaria.api.schemas.reports import ConsolidationReportResponse
from analise_tributaria.domain.errors import InvalidRequestError, compose_error_message
from analise_tributaria.services.company_service import CompanyService
from analise_tributaria.services.ingestion_service import IngestionService

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post(
    "",
    response_model=ConsolidationReportResponse,
    response_model_exclude_unset=True,
    responses={
        400: {"description": "Nenhum arquivo enviado"},
        403: {"description": "Usuario sem acesso a empresa"},
        404: {"description": "Empresa nao encontrada"},
        422: {"description": "Planilha ilegivel"},
    },
)
def upload_spreadsheet(
    user: CurrentUser,
    ingestion_service: Annotated[IngestionService, Depends(get_ingestion_service)],
    company_service: Annotated[CompanyService, Depends(get_company_service)],
    file: Annotated[UploadFile | None, File()] = None,
    company_id: Annotated[int | None, Form(ge=1)] = None,
) -> ConsolidationReportResponse:
    """Consolidate an NCM/CFOP spreadsheet, storing it when a company is given."""

    if file is None:
        raise InvalidRequestError(
            message=compose_error_message(
                cause="No file was uploaded.",
                action="Send the spreadsheet in the 'file' form field.",
            )
        )
    if company_id is not None:
        company_service.require_access(user, company_id)

    report = ingestion_service.ingest(file.file.read(), company_id=company_id)
    return ConsolidationReportResponse.from_report(report)
