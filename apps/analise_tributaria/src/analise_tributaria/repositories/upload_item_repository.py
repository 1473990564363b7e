"""Uploaded item batch persistence operations."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from analise_tributaria.db.models.upload_item import UploadItem
from analise_tributaria.domain.rows import ConsolidatedItem


class UploadItemRepository:
    """Repository for append-only upload batches keyed by company and time."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add_batch(
        self,
        *,
        company_id: int,
        items: Sequence[ConsolidatedItem],
        created_at: datetime,
    ) -> int:
        """Stage one batch; every row shares ``created_at``."""

        rows = [
            UploadItem(
                company_id=company_id,
                ncm=item.ncm,
                cfop=item.cfop,
                cclasstrib_sugerido=item.cclasstrib_sugerido,
                qtd_registros=item.qtd_registros,
                status=item.status,
                descricao=item.descricao,
                nome_produto=item.nome_produto,
                created_at=created_at,
            )
            for item in items
        ]
        self._session.add_all(rows)
        self._session.flush()
        return len(rows)

    def get_latest_batch(self, company_id: int) -> list[ConsolidatedItem]:
        """Return the rows of the most recent batch, in insertion order."""

        latest_created_at = (
            select(func.max(UploadItem.created_at))
            .where(UploadItem.company_id == company_id)
            .scalar_subquery()
        )
        statement = (
            select(UploadItem)
            .where(
                UploadItem.company_id == company_id,
                UploadItem.created_at == latest_created_at,
            )
            .order_by(UploadItem.id.asc())
        )
        return [
            ConsolidatedItem(
                ncm=row.ncm,
                cfop=row.cfop,
                cclasstrib_sugerido=row.cclasstrib_sugerido,
                qtd_registros=row.qtd_registros,
                status=row.status,
                descricao=row.descricao,
                nome_produto=row.nome_produto,
            )
            for row in self._session.scalars(statement).all()
        ]
