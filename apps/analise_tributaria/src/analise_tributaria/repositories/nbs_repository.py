"""NBS reference table persistence operations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from analise_tributaria.db.models.nbs_entry import NbsEntry
from analise_tributaria.domain.nbs_import import NbsRow


@dataclass(frozen=True, slots=True)
class NbsQueryFilters:
    search: str | None = None
    limit: int = 50
    offset: int = 0


class NbsRepository:
    """Repository for the NBS lookup table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def search(self, filters: NbsQueryFilters) -> tuple[list[NbsEntry], int]:
        statement = select(NbsEntry)
        if filters.search:
            pattern = f"%{filters.search}%"
            statement = statement.where(
                or_(
                    NbsEntry.nbs_code.ilike(pattern),
                    NbsEntry.descricao_nbs.ilike(pattern),
                    NbsEntry.item_lc_116.ilike(pattern),
                    NbsEntry.descricao_item.ilike(pattern),
                )
            )

        total_statement = select(func.count()).select_from(statement.subquery())
        total = int(self._session.scalar(total_statement) or 0)

        page_statement = (
            statement.order_by(
                NbsEntry.item_lc_116.asc(),
                NbsEntry.nbs_code.asc(),
                NbsEntry.id.asc(),
            )
            .limit(filters.limit)
            .offset(filters.offset)
        )
        return list(self._session.scalars(page_statement).all()), total

    def replace_all(self, rows: Sequence[NbsRow]) -> int:
        self._session.execute(delete(NbsEntry))
        self._session.add_all(NbsEntry(**asdict(row)) for row in rows)
        self._session.flush()
        return len(rows)
