"""Company header block read from the optional ``empresa`` sheet."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from analise_tributaria.domain.rows import cell_text

COMPANY_SHEET_NAME = "empresa"


@dataclass(frozen=True, slots=True)
class CompanyMeta:
    nome: str
    cnpj: str


def find_company_sheet(sheet_names: Sequence[str]) -> str | None:
    """Return the first sheet named ``empresa`` regardless of case."""

    for name in sheet_names:
        if name.lower() == COMPANY_SHEET_NAME:
            return name
    return None


def _cell(grid: Sequence[Sequence[Any]], row: int, column: int) -> str:
    if row >= len(grid) or column >= len(grid[row]):
        return ""
    return cell_text(grid[row][column])


def extract_company_meta(grid: Sequence[Sequence[Any]]) -> CompanyMeta | None:
    """Read company name (A1) and CNPJ (A2 + B2) from a raw, blank-row-free grid."""

    nome = _cell(grid, 0, 0)
    cnpj = " ".join(part for part in (_cell(grid, 1, 0), _cell(grid, 1, 1)) if part)
    if not nome and not cnpj:
        return None
    return CompanyMeta(nome=nome, cnpj=cnpj)
