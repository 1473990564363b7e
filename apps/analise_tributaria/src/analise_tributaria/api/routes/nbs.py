"""NBS reference lookup routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from analise_tributaria.api.dependencies import CurrentUser, get_nbs_service
from analise_tributaria.api.schemas.nbs import NbsListResponse
from analise_tributaria.services.nbs_service import NbsService

router = APIRouter(prefix="/nbs", tags=["NBS"])


@router.get("", response_model=NbsListResponse)
def list_nbs(
    _: CurrentUser,
    service: Annotated[NbsService, Depends(get_nbs_service)],
    q: Annotated[str | None, Query(max_length=200)] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    page: Annotated[int, Query(ge=1)] = 1,
) -> NbsListResponse:
    """Search the NBS table by code, LC 116 item or descriptions."""

    return NbsListResponse.from_page(service.search(query=q, limit=limit, page=page))
