"""Fill-down reading of the NBS reference spreadsheet.

The published NBS table uses merged cells: a blank cell means "same as the
row above". Reading it is a fold over the rows where the accumulator holds
the last non-blank value of every column group.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from analise_tributaria.domain.rows import cell_text


@dataclass(frozen=True, slots=True)
class NbsRow:
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


@dataclass(frozen=True, slots=True)
class FillDownState:
    """Last non-blank value seen for every column group."""

    item_lc_116: str | None = None
    descricao_item: str | None = None
    nbs_code: str | None = None
    descricao_nbs: str | None = None
    ps_onerosa: str | None = None
    adq_exterior: str | None = None
    indop: str | None = None
    local_incidencia: str | None = None
    c_class_trib: str | None = None
    nome_c_class_trib: str | None = None


def _value(cells: Sequence[Any], index: int) -> str | None:
    if index >= len(cells):
        return None
    return cell_text(cells[index]) or None


def fill_down(
    state: FillDownState,
    cells: Sequence[Any],
) -> tuple[FillDownState, NbsRow | None]:
    """Advance the accumulator with one row and resolve that row's values.

    NBS code and description move together, as do cClassTrib and its name:
    a new code always brings its own (possibly blank) description along.
    """

    nbs_code = _value(cells, 2)
    c_class_trib = _value(cells, 8)
    state = replace(
        state,
        item_lc_116=_value(cells, 0) or state.item_lc_116,
        descricao_item=_value(cells, 1) or state.descricao_item,
        ps_onerosa=_value(cells, 4) or state.ps_onerosa,
        adq_exterior=_value(cells, 5) or state.adq_exterior,
        indop=_value(cells, 6) or state.indop,
        local_incidencia=_value(cells, 7) or state.local_incidencia,
    )
    if nbs_code:
        state = replace(state, nbs_code=nbs_code, descricao_nbs=_value(cells, 3))
    if c_class_trib:
        state = replace(
            state,
            c_class_trib=c_class_trib,
            nome_c_class_trib=_value(cells, 9),
        )

    if not state.nbs_code:
        return state, None

    return state, NbsRow(
        nbs_code=state.nbs_code,
        descricao_nbs=state.descricao_nbs,
        item_lc_116=state.item_lc_116,
        descricao_item=state.descricao_item,
        ps_onerosa=state.ps_onerosa,
        adq_exterior=state.adq_exterior,
        indop=state.indop,
        local_incidencia=state.local_incidencia,
        c_class_trib=state.c_class_trib,
        nome_c_class_trib=state.nome_c_class_trib,
    )


def read_nbs_rows(grid: Iterable[Sequence[Any]]) -> list[NbsRow]:
    """Resolve every data row of a raw grid whose first row is the header."""

    state = FillDownState()
    rows: list[NbsRow] = []
    for index, cells in enumerate(grid):
        if index == 0 or not any(cell_text(cell) for cell in cells):
            continue
        state, row = fill_down(state, cells)
        if row is not None:
            rows.append(row)
    return rows
