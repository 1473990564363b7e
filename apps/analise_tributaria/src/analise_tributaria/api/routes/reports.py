"""Latest-batch report routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from analise_tributaria.api.dependencies import (
    CurrentUser,
    get_company_service,
    get_report_service,
)
from analise_tributaria.api.schemas.reports import (
    ConsolidationReportResponse,
    GroupPageResponse,
)
from analise_tributaria.domain.grouping import StatusFilter
from analise_tributaria.services.company_service import CompanyService
from analise_tributaria.services.report_service import (
    EXPORT_FILENAME,
    ReportService,
)

router = APIRouter(prefix="/companies/{company_id}/report", tags=["Reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get(
    "",
    response_model=ConsolidationReportResponse,
    response_model_exclude_unset=True,
    responses={
        204: {"description": "Empresa sem planilhas enviadas"},
        403: {"description": "Usuario sem acesso a empresa"},
        404: {"description": "Empresa nao encontrada"},
    },
)
def get_latest_report(
    company_id: Annotated[int, Path(ge=1)],
    user: CurrentUser,
    company_service: Annotated[CompanyService, Depends(get_company_service)],
    report_service: Annotated[ReportService, Depends(get_report_service)],
) -> ConsolidationReportResponse | Response:
    """Return the report of the company's most recent upload."""

    company = company_service.require_access(user, company_id)
    report = report_service.get_latest_report(company)
    if report is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return ConsolidationReportResponse.from_report(report)


@router.get(
    "/groups",
    response_model=GroupPageResponse,
    responses={
        204: {"description": "Empresa sem planilhas enviadas"},
        403: {"description": "Usuario sem acesso a empresa"},
        404: {"description": "Empresa nao encontrada"},
    },
)
def get_report_groups(
    company_id: Annotated[int, Path(ge=1)],
    user: CurrentUser,
    company_service: Annotated[CompanyService, Depends(get_company_service)],
    report_service: Annotated[ReportService, Depends(get_report_service)],
    status_filter: Annotated[StatusFilter, Query(alias="status")] = StatusFilter.ALL,
    q: Annotated[str | None, Query(max_length=200)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
) -> GroupPageResponse | Response:
    """Return one page of the NCM/CFOP grouped view of the latest upload."""

    company = company_service.require_access(user, company_id)
    group_page = report_service.get_group_page(
        company,
        status=status_filter,
        search=q,
        page=page,
    )
    if group_page is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return GroupPageResponse.from_page(group_page)


@router.get(
    "/export",
    response_class=Response,
    responses={
        200: {"content": {XLSX_MEDIA_TYPE: {}}},
        204: {"description": "Empresa sem planilhas enviadas"},
    },
)
def export_report(
    company_id: Annotated[int, Path(ge=1)],
    user: CurrentUser,
    company_service: Annotated[CompanyService, Depends(get_company_service)],
    report_service: Annotated[ReportService, Depends(get_report_service)],
) -> Response:
    """Download the grouped analysis as an Excel workbook."""

    company = company_service.require_access(user, company_id)
    content = report_service.export_workbook(company)
    if content is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
