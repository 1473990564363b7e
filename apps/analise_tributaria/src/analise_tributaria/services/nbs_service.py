"""Business service for the NBS reference table."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from analise_tributaria.db.models.nbs_entry import NbsEntry
from analise_tributaria.domain.nbs_import import NbsRow, read_nbs_rows
from analise_tributaria.infrastructure.spreadsheet import read_sheet_grid
from analise_tributaria.repositories.nbs_repository import NbsQueryFilters

logger = logging.getLogger(__name__)

DEFAULT_NBS_SHEET_INDEX = 1


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class NbsRepositoryProtocol(Protocol):
    def search(self, filters: NbsQueryFilters) -> tuple[list[NbsEntry], int]: ...

    def replace_all(self, rows: Sequence[NbsRow]) -> int: ...


@dataclass(frozen=True, slots=True)
class NbsPage:
    data: list[NbsEntry]
    total: int
    page: int
    limit: int
    pages: int


class NbsService:
    """Searches and reloads the NBS lookup table."""

    def __init__(
        self,
        *,
        nbs_repository: NbsRepositoryProtocol,
        session: SessionProtocol,
    ) -> None:
        self._nbs_repository = nbs_repository
        self._session = session

    def search(self, *, query: str | None, limit: int, page: int) -> NbsPage:
        entries, total = self._nbs_repository.search(
            NbsQueryFilters(
                search=(query or "").strip() or None,
                limit=limit,
                offset=(page - 1) * limit,
            )
        )
        return NbsPage(
            data=entries,
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit),
        )

    def import_workbook(
        self,
        content: bytes,
        *,
        sheet_index: int = DEFAULT_NBS_SHEET_INDEX,
    ) -> int:
        """Replace the table with the rows of one workbook sheet."""

        rows = read_nbs_rows(read_sheet_grid(content, sheet_index))
        try:
            inserted = self._nbs_repository.replace_all(rows)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("nbs_import_finished", extra={"rows": inserted})
        return inserted
