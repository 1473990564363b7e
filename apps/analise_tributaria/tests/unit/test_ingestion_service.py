from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from analise_tributaria.domain.company_meta import CompanyMeta
from analise_tributaria.domain.errors import MalformedSpreadsheetError
from analise_tributaria.domain.rows import ConsolidatedItem
from analise_tributaria.infrastructure.spreadsheet import WorkbookContent
from analise_tributaria.services.ingestion_service import (
    IngestionService,
    analyze_spreadsheet,
    consolidate_workbook,
)

FIXED_NOW = datetime(2026, 3, 2, 14, 30, tzinfo=UTC)


class FakeSession:
    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True


@dataclass
class FakeUploadItemRepository:
    fail: bool = False
    batches: list[tuple[int, list[ConsolidatedItem], datetime]] = field(
        default_factory=list
    )

    def add_batch(
        self,
        *,
        company_id: int,
        items: Sequence[ConsolidatedItem],
        created_at: datetime,
    ) -> int:
        if self.fail:
            raise RuntimeError("disk full")
        self.batches.append((company_id, list(items), created_at))
        return len(items)


def build_service(
    repository: FakeUploadItemRepository,
    session: FakeSession,
) -> IngestionService:
    return IngestionService(
        upload_item_repository=repository,
        session=session,
        clock=lambda: FIXED_NOW,
    )


def test_consolidate_workbook_drops_rows_without_codes() -> None:
    workbook = WorkbookContent(
        sheet_name="Consolidado",
        rows=[
            {"Código NCM": 1001.0, "CFOP": 5102, "cClasstrib": None},
            {"NCM": None, "CFOP": 5102},
            {"NCM": "2002", "CFOP": "6108", "Status": "ausente", "qtd_registros": 4},
        ],
        company_grid=[["Mercado Central"], ["12.345.678/0001-90"]],
    )

    report = consolidate_workbook(workbook)

    assert [(item.ncm, item.cfop) for item in report.tabela_consolidada] == [
        ("1001", "5102"),
        ("2002", "6108"),
    ]
    assert report.tabela_consolidada[1].status == "AUSENTE"
    assert report.tabela_consolidada[1].qtd_registros == 4
    assert report.resumo.total_ausente == 2
    assert report.empresa == CompanyMeta(
        nome="Mercado Central",
        cnpj="12.345.678/0001-90",
    )


def test_ingest_without_company_does_not_persist(build_workbook) -> None:
    repository = FakeUploadItemRepository()
    session = FakeSession()
    content = build_workbook([("1001", "5102", "7", 1, "OK", "Arroz", "Arroz")])

    report = build_service(repository, session).ingest(content, company_id=None)

    assert report.resumo.total_combinacoes == 1
    assert repository.batches == []
    assert session.committed is False


def test_ingest_with_company_persists_whole_batch(build_workbook) -> None:
    repository = FakeUploadItemRepository()
    session = FakeSession()
    content = build_workbook(
        [
            ("1001", "5102", "7", 1, "OK", "Arroz", "Arroz"),
            ("2002", "6108", None, 2, "AUSENTE", "Milho", "Milho"),
        ]
    )

    report = build_service(repository, session).ingest(content, company_id=9)

    assert session.committed is True
    [(company_id, items, created_at)] = repository.batches
    assert company_id == 9
    assert items == report.tabela_consolidada
    assert created_at == FIXED_NOW


def test_ingest_skips_persistence_for_empty_result(build_workbook) -> None:
    repository = FakeUploadItemRepository()
    session = FakeSession()
    content = build_workbook([(None, "5102", "7", 1, "OK", "Sem NCM", None)])

    report = build_service(repository, session).ingest(content, company_id=9)

    assert report.tabela_consolidada == []
    assert repository.batches == []
    assert session.committed is False


def test_ingest_rolls_back_when_persistence_fails(build_workbook) -> None:
    repository = FakeUploadItemRepository(fail=True)
    session = FakeSession()
    content = build_workbook([("1001", "5102", "7", 1, "OK", "Arroz", "Arroz")])

    with pytest.raises(RuntimeError):
        build_service(repository, session).ingest(content, company_id=9)

    assert session.rolled_back is True
    assert session.committed is False


def test_ingest_rejects_malformed_content() -> None:
    service = build_service(FakeUploadItemRepository(), FakeSession())

    with pytest.raises(MalformedSpreadsheetError):
        service.ingest(b"not a workbook", company_id=1)


def test_analyze_spreadsheet_keeps_explicit_not_available(build_workbook) -> None:
    content = build_workbook([("1001", "5102", "N/A", 1, "OK", "NA", "null")])

    report = analyze_spreadsheet(content)

    [item] = report.tabela_consolidada
    assert (item.cclasstrib_sugerido, item.descricao, item.nome_produto) == (
        "N/A",
        "NA",
        "null",
    )
    assert report.resumo.total_ausente == 1
