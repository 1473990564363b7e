"""Schemas for the consolidated report payload and its grouped view."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from analise_tributaria.domain.grouping import GroupPage, format_cclasstrib
from analise_tributaria.domain.rows import ConsolidatedItem
from analise_tributaria.domain.summary import ConsolidationReport, MissingCase


class ConsolidatedItemResponse(BaseModel):
    ncm: str
    cfop: str
    cClasstrib_sugerido: str | None
    qtd_registros: int = Field(ge=1)
    status: str
    descricao: str
    nome_produto: str

    @classmethod
    def from_item(cls, item: ConsolidatedItem) -> ConsolidatedItemResponse:
        return cls(
            ncm=item.ncm,
            cfop=item.cfop,
            cClasstrib_sugerido=item.cclasstrib_sugerido,
            qtd_registros=item.qtd_registros,
            status=item.status,
            descricao=item.descricao,
            nome_produto=item.nome_produto,
        )


class MissingCaseResponse(BaseModel):
    ncm: str
    cfop: str
    qtd_registros: int
    descricao: str

    @classmethod
    def from_case(cls, case: MissingCase) -> MissingCaseResponse:
        return cls(
            ncm=case.ncm,
            cfop=case.cfop,
            qtd_registros=case.qtd_registros,
            descricao=case.descricao,
        )


class SummaryResponse(BaseModel):
    total_combinacoes: int = Field(ge=0)
    total_ok: int = Field(ge=0)
    total_ausente: int = Field(ge=0)
    total_multiplo: int = Field(ge=0)
    total_cfop_na: int = Field(ge=0)


class CompanyMetaResponse(BaseModel):
    nome: str
    cnpj: str


class ConsolidationReportResponse(BaseModel):
    """Report payload; ``empresa`` is omitted when no company data exists."""

    tabela_consolidada: list[ConsolidatedItemResponse]
    casos_ausentes: list[MissingCaseResponse]
    resumo: SummaryResponse
    empresa: CompanyMetaResponse | None = None
    cfops_na: list[str]

    @classmethod
    def from_report(cls, report: ConsolidationReport) -> ConsolidationReportResponse:
        fields: dict[str, Any] = dict(
            tabela_consolidada=[
                ConsolidatedItemResponse.from_item(item)
                for item in report.tabela_consolidada
            ],
            casos_ausentes=[
                MissingCaseResponse.from_case(case) for case in report.casos_ausentes
            ],
            resumo=SummaryResponse(
                total_combinacoes=report.resumo.total_combinacoes,
                total_ok=report.resumo.total_ok,
                total_ausente=report.resumo.total_ausente,
                total_multiplo=report.resumo.total_multiplo,
                total_cfop_na=report.resumo.total_cfop_na,
            ),
            cfops_na=list(report.cfops_na),
        )
        if report.empresa is not None:
            fields["empresa"] = CompanyMetaResponse(
                nome=report.empresa.nome,
                cnpj=report.empresa.cnpj,
            )
        return cls(**fields)


class GroupedEntryResponse(ConsolidatedItemResponse):
    cClasstrib_formatado: str

    @classmethod
    def from_entry(cls, item: ConsolidatedItem) -> GroupedEntryResponse:
        return cls(
            **ConsolidatedItemResponse.from_item(item).model_dump(),
            cClasstrib_formatado=format_cclasstrib(item.cclasstrib_sugerido),
        )


class NcmGroupResponse(BaseModel):
    ncm: str
    descricao: str
    cfops: list[GroupedEntryResponse]


class GroupPageResponse(BaseModel):
    """One page of NCM groups (ten per page)."""

    groups: list[NcmGroupResponse]
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_groups: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @classmethod
    def from_page(cls, page: GroupPage) -> GroupPageResponse:
        return cls(
            groups=[
                NcmGroupResponse(
                    ncm=group.ncm,
                    descricao=group.descricao,
                    cfops=[
                        GroupedEntryResponse.from_entry(entry) for entry in group.cfops
                    ],
                )
                for group in page.groups
            ],
            page=page.page,
            page_size=page.page_size,
            total_groups=page.total_groups,
            total_pages=page.total_pages,
        )
