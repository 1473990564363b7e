"""Schemas for NBS lookup endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field

from analise_tributaria.db.models.nbs_entry import NbsEntry
from analise_tributaria.services.nbs_service import NbsPage


class NbsEntryResponse(BaseModel):
    id: int
    nbs_code: str
    descricao_nbs: str | None
    item_lc_116: str | None
    descricao_item: str | None
    ps_onerosa: str | None
    adq_exterior: str | None
    indop: str | None
    local_incidencia: str | None
    c_class_trib: str | None
    nome_c_class_trib: str | None

    @classmethod
    def from_model(cls, entry: NbsEntry) -> NbsEntryResponse:
        return cls(
            id=entry.id,
            nbs_code=entry.nbs_code,
            descricao_nbs=entry.descricao_nbs,
            item_lc_116=entry.item_lc_116,
            descricao_item=entry.descricao_item,
            ps_onerosa=entry.ps_onerosa,
            adq_exterior=entry.adq_exterior,
            indop=entry.indop,
            local_incidencia=entry.local_incidencia,
            c_class_trib=entry.c_class_trib,
            nome_c_class_trib=entry.nome_c_class_trib,
        )


class NbsMetaResponse(BaseModel):
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    pages: int = Field(ge=0)


class NbsListResponse(BaseModel):
    """Paginated NBS search payload."""

    data: list[NbsEntryResponse]
    meta: NbsMetaResponse

    @classmethod
    def from_page(cls, page: NbsPage) -> NbsListResponse:
        return cls(
            data=[NbsEntryResponse.from_model(entry) for entry in page.data],
            meta=NbsMetaResponse(
                total=page.total,
                page=page.page,
                limit=page.limit,
                pages=page.pages,
            ),
        )
