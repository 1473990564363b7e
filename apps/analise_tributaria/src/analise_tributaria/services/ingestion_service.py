"""Spreadsheet ingestion: read, normalize, validate, summarize and persist."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Protocol

from analise_tributaria.domain.columns import normalize_row
from analise_tributaria.domain.company_meta import extract_company_meta
from analise_tributaria.domain.rows import ConsolidatedItem, parse_row
from analise_tributaria.domain.summary import ConsolidationReport, summarize
from analise_tributaria.infrastructure.spreadsheet import (
    WorkbookContent,
    read_workbook,
)

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class UploadItemRepositoryProtocol(Protocol):
    def add_batch(
        self,
        *,
        company_id: int,
        items: Sequence[ConsolidatedItem],
        created_at: datetime,
    ) -> int: ...


def consolidate_workbook(workbook: WorkbookContent) -> ConsolidationReport:
    """Run the normalization and summary passes over an already read workbook."""

    items: list[ConsolidatedItem] = []
    for raw_row in workbook.rows:
        item = parse_row(normalize_row(raw_row))
        if item is not None:
            items.append(item)

    empresa = (
        extract_company_meta(workbook.company_grid)
        if workbook.company_grid is not None
        else None
    )
    report = summarize(items, empresa=empresa)
    logger.info(
        "spreadsheet_ingested",
        extra={
            "sheet_name": workbook.sheet_name,
            "accepted_rows": len(items),
            "dropped_rows": len(workbook.rows) - len(items),
            "has_company_sheet": workbook.company_grid is not None,
        },
    )
    return report


def analyze_spreadsheet(content: bytes) -> ConsolidationReport:
    """Read workbook bytes and build the consolidation report without persisting."""

    return consolidate_workbook(read_workbook(content))


class IngestionService:
    """Turns an uploaded spreadsheet into a report and stores it as a batch."""

    def __init__(
        self,
        *,
        upload_item_repository: UploadItemRepositoryProtocol,
        session: SessionProtocol,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._upload_item_repository = upload_item_repository
        self._session = session
        self._clock = clock or (lambda: datetime.now(tz=UTC))

    def ingest(self, content: bytes, *, company_id: int | None) -> ConsolidationReport:
        """Analyse ``content``; when ``company_id`` is set, persist the batch.

        The batch is committed as a whole or not at all.
        """

        report = analyze_spreadsheet(content)
        if company_id is None or not report.tabela_consolidada:
            return report

        created_at = self._clock()
        try:
            stored = self._upload_item_repository.add_batch(
                company_id=company_id,
                items=report.tabela_consolidada,
                created_at=created_at,
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "upload_batch_persisted",
            extra={
                "company_id": company_id,
                "items": stored,
                "created_at": created_at.isoformat(),
            },
        )
        return report
