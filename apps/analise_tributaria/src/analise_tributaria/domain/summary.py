"""Summary counters derived from a flat list of consolidated items.

Two independent predicates live here and must not be merged:

* ``is_missing_cclasstrib`` drives ``total_ausente``/``total_cfop_na``;
* ``is_absent_status`` drives the ``casos_ausentes`` list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from analise_tributaria.domain.company_meta import CompanyMeta
from analise_tributaria.domain.rows import ConsolidatedItem

NOT_AVAILABLE = "N/A"
ABSENT_STATUS = "AUSENTE"


@dataclass(frozen=True, slots=True)
class MissingCase:
    """Row reported by the source as absent (``status == AUSENTE``)."""

    ncm: str
    cfop: str
    qtd_registros: int
    descricao: str


@dataclass(frozen=True, slots=True)
class Summary:
    total_combinacoes: int
    total_ok: int
    total_ausente: int
    total_multiplo: int
    total_cfop_na: int


@dataclass(frozen=True, slots=True)
class ConsolidationReport:
    """Full ingestion result as returned to clients."""

    tabela_consolidada: list[ConsolidatedItem]
    casos_ausentes: list[MissingCase]
    resumo: Summary
    cfops_na: list[str]
    empresa: CompanyMeta | None = None


def is_missing_cclasstrib(item: ConsolidatedItem) -> bool:
    """Return whether no suggested cClassTrib was determined for the item."""

    value = item.cclasstrib_sugerido
    return not value or value.strip().upper() == NOT_AVAILABLE


def is_absent_status(item: ConsolidatedItem) -> bool:
    """Return whether the source flagged the item as absent."""

    return item.status == ABSENT_STATUS


def unresolved_cfops(items: Sequence[ConsolidatedItem]) -> list[str]:
    """Distinct CFOPs having at least one item without cClassTrib.

    Order follows first appearance in ``items``.
    """

    return list(
        dict.fromkeys(item.cfop for item in items if is_missing_cclasstrib(item))
    )


def summarize(
    items: Sequence[ConsolidatedItem],
    empresa: CompanyMeta | None = None,
) -> ConsolidationReport:
    """Compute the summary pass over the flat, unmerged item list."""

    total_combinacoes = len(items)
    total_ausente = sum(1 for item in items if is_missing_cclasstrib(item))
    cfops_na = unresolved_cfops(items)

    return ConsolidationReport(
        tabela_consolidada=list(items),
        casos_ausentes=[
            MissingCase(
                ncm=item.ncm,
                cfop=item.cfop,
                qtd_registros=item.qtd_registros,
                descricao=item.descricao,
            )
            for item in items
            if is_absent_status(item)
        ],
        resumo=Summary(
            total_combinacoes=total_combinacoes,
            total_ok=total_combinacoes - total_ausente,
            total_ausente=total_ausente,
            total_multiplo=0,
            total_cfop_na=len(cfops_na),
        ),
        cfops_na=cfops_na,
        empresa=empresa,
    )
