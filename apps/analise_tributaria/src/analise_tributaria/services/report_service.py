"""Business service for reading back the latest upload batch of a company."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Protocol

import pandas as pd

from analise_tributaria.db.models.company import Company
from analise_tributaria.domain.company_meta import CompanyMeta
from analise_tributaria.domain.grouping import (
    GroupPage,
    StatusFilter,
    build_group_page,
    format_cclasstrib,
    group_by_ncm,
)
from analise_tributaria.domain.rows import ConsolidatedItem
from analise_tributaria.domain.summary import ConsolidationReport, summarize

EXPORT_FILENAME = "analise_tributaria.xlsx"
EXPORT_SHEET_NAME = "Analise"


class UploadItemReaderProtocol(Protocol):
    def get_latest_batch(self, company_id: int) -> list[ConsolidatedItem]: ...


@dataclass(slots=True)
class ReportService:
    """Rebuilds reports, grouped views and exports from stored batches.

    Every method returns ``None`` when the company has never uploaded.
    """

    upload_item_repository: UploadItemReaderProtocol

    def get_latest_report(self, company: Company) -> ConsolidationReport | None:
        items = self.upload_item_repository.get_latest_batch(company.id)
        if not items:
            return None
        empresa = CompanyMeta(nome=company.name, cnpj=company.cnpj)
        return summarize(items, empresa=empresa)

    def get_group_page(
        self,
        company: Company,
        *,
        status: StatusFilter = StatusFilter.ALL,
        search: str | None = None,
        page: int = 1,
    ) -> GroupPage | None:
        report = self.get_latest_report(company)
        if report is None:
            return None
        return build_group_page(
            report.tabela_consolidada,
            status=status,
            search=search,
            cfops_na=report.cfops_na,
            page=page,
        )

    def export_workbook(self, company: Company) -> bytes | None:
        """Render the grouped analysis as an ``.xlsx`` file."""

        items = self.upload_item_repository.get_latest_batch(company.id)
        if not items:
            return None

        rows = [
            {
                "NCM": group.ncm,
                "CFOP": entry.cfop,
                "cClasstrib": format_cclasstrib(entry.cclasstrib_sugerido),
            }
            for group in group_by_ncm(items)
            for entry in group.cfops
        ]
        buffer = io.BytesIO()
        frame = pd.DataFrame(rows, columns=["NCM", "CFOP", "cClasstrib"])
        frame.to_excel(
            buffer,
            sheet_name=EXPORT_SHEET_NAME,
            index=False,
            engine="openpyxl",
        )
        return buffer.getvalue()
