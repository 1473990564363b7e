"""Conversion of normalized spreadsheet rows into consolidated items."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from analise_tributaria.domain.columns import (
    CCLASSTRIB_KEYS,
    CFOP_KEYS,
    DESCRIPTION_KEYS,
    NCM_KEYS,
    PRODUCT_NAME_KEYS,
    RECORD_COUNT_KEYS,
    STATUS_KEYS,
    pick,
)

DEFAULT_STATUS = "OK"
DEFAULT_RECORD_COUNT = 1


@dataclass(frozen=True, slots=True)
class ConsolidatedItem:
    """One normalized fiscal record (NCM x CFOP x suggested cClassTrib)."""

    ncm: str
    cfop: str
    cclasstrib_sugerido: str | None
    qtd_registros: int
    status: str
    descricao: str
    nome_produto: str


def cell_text(value: Any) -> str:
    """Render a spreadsheet cell as trimmed text.

    Integer-valued floats lose their fractional part so that numeric codes
    read as ``1001.0`` come back as ``"1001"``.
    """

    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def coerce_record_count(value: Any) -> int:
    """Coerce a raw quantity cell into a record count of at least one."""

    if value is None:
        return DEFAULT_RECORD_COUNT
    if isinstance(value, bool):
        return int(value) or DEFAULT_RECORD_COUNT
    if isinstance(value, int):
        number = Decimal(value)
    else:
        text = str(value).strip()
        if not text:
            return DEFAULT_RECORD_COUNT
        try:
            number = Decimal(text)
        except InvalidOperation:
            return DEFAULT_RECORD_COUNT
    if not number.is_finite():
        return DEFAULT_RECORD_COUNT
    count = int(number)
    return count if count >= 1 else DEFAULT_RECORD_COUNT


def parse_row(row: Mapping[str, Any]) -> ConsolidatedItem | None:
    """Build a consolidated item from one normalized row.

    Returns ``None`` when the row lacks an NCM or a CFOP.
    """

    ncm = cell_text(pick(row, NCM_KEYS))
    cfop = cell_text(pick(row, CFOP_KEYS))
    if not ncm or not cfop:
        return None

    cclasstrib = cell_text(pick(row, CCLASSTRIB_KEYS)) or None
    status = cell_text(pick(row, STATUS_KEYS)).upper() or DEFAULT_STATUS
    descricao = cell_text(pick(row, DESCRIPTION_KEYS))
    nome_produto = cell_text(pick(row, PRODUCT_NAME_KEYS)) or descricao

    return ConsolidatedItem(
        ncm=ncm,
        cfop=cfop,
        cclasstrib_sugerido=cclasstrib,
        qtd_registros=coerce_record_count(pick(row, RECORD_COUNT_KEYS)),
        status=status,
        descricao=descricao,
        nome_produto=nome_produto,
    )
