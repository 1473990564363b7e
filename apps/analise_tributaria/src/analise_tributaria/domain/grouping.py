"""Display-side re-aggregation of consolidated items.

Items are filtered, grouped by NCM, merged by ``(CFOP, formatted cClassTrib)``
inside each group and paginated ten NCM groups at a time. Every call
recomputes from the full item list; datasets are expected to hold thousands
of rows, not millions.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, replace

from analise_tributaria.domain.rows import ConsolidatedItem
from analise_tributaria.domain.summary import NOT_AVAILABLE

NOT_FOUND_LABEL = "Não Encontrado"
CCLASSTRIB_WIDTH = 6
PAGE_SIZE = 10


class StatusFilter(enum.StrEnum):
    """Status buckets offered by the report view."""

    ALL = "ALL"
    OK = "OK"
    MISSING = "MISSING"
    UNRESOLVED_SECONDARY = "UNRESOLVED_SECONDARY"


@dataclass(frozen=True, slots=True)
class NcmGroup:
    ncm: str
    descricao: str
    cfops: list[ConsolidatedItem]


@dataclass(frozen=True, slots=True)
class GroupPage:
    groups: list[NcmGroup]
    page: int
    page_size: int
    total_groups: int
    total_pages: int


def format_cclasstrib(value: str | None) -> str:
    """Render a suggested cClassTrib for display.

    Unresolved values become ``"Não Encontrado"``; anything else is
    left-padded with zeros to six characters.
    """

    if not value:
        return NOT_FOUND_LABEL
    cleaned = value.strip()
    # Same case-insensitive "N/A" test as is_missing_cclasstrib.
    if (
        not cleaned
        or cleaned.upper() == NOT_AVAILABLE
        or cleaned == NOT_FOUND_LABEL
    ):
        return NOT_FOUND_LABEL
    return cleaned.rjust(CCLASSTRIB_WIDTH, "0")


def _matches_status(
    item: ConsolidatedItem,
    status: StatusFilter,
    cfops_na: Collection[str],
) -> bool:
    if status is StatusFilter.ALL:
        return True
    if status is StatusFilter.UNRESOLVED_SECONDARY:
        return item.cfop in cfops_na
    found = format_cclasstrib(item.cclasstrib_sugerido) != NOT_FOUND_LABEL
    return found if status is StatusFilter.OK else not found


def _matches_text(item: ConsolidatedItem, needle: str) -> bool:
    haystacks = (item.ncm, item.cfop, item.descricao, item.nome_produto)
    return any(needle in haystack.lower() for haystack in haystacks)


def filter_items(
    items: Iterable[ConsolidatedItem],
    *,
    status: StatusFilter = StatusFilter.ALL,
    search: str | None = None,
    cfops_na: Collection[str] = (),
) -> list[ConsolidatedItem]:
    """Apply the status bucket and free-text filters (both must match)."""

    needle = (search or "").strip().lower()
    unresolved = frozenset(cfops_na)
    return [
        item
        for item in items
        if _matches_status(item, status, unresolved)
        and (not needle or _matches_text(item, needle))
    ]


def group_by_ncm(items: Iterable[ConsolidatedItem]) -> list[NcmGroup]:
    """Group items by NCM and merge duplicates inside each group.

    Merging sums ``qtd_registros``; a merged entry without cClassTrib adopts
    the first incoming non-empty one.
    """

    merged_by_ncm: dict[str, dict[tuple[str, str], ConsolidatedItem]] = {}
    descriptions: dict[str, str] = {}

    for item in items:
        if item.ncm not in merged_by_ncm:
            merged_by_ncm[item.ncm] = {}
            descriptions[item.ncm] = item.descricao
        merged = merged_by_ncm[item.ncm]

        key = (item.cfop, format_cclasstrib(item.cclasstrib_sugerido))
        existing = merged.get(key)
        if existing is None:
            merged[key] = item
            continue

        cclasstrib = existing.cclasstrib_sugerido
        if not cclasstrib and item.cclasstrib_sugerido:
            cclasstrib = item.cclasstrib_sugerido
        merged[key] = replace(
            existing,
            qtd_registros=existing.qtd_registros + item.qtd_registros,
            cclasstrib_sugerido=cclasstrib,
        )

    groups = [
        NcmGroup(
            ncm=ncm,
            descricao=descriptions[ncm],
            cfops=sorted(merged.values(), key=lambda entry: entry.cfop),
        )
        for ncm, merged in merged_by_ncm.items()
    ]
    return sorted(groups, key=lambda group: group.ncm)


def paginate(
    groups: Sequence[NcmGroup],
    page: int = 1,
    page_size: int = PAGE_SIZE,
) -> GroupPage:
    """Slice one page of NCM groups; pages past the end are empty."""

    page = max(page, 1)
    start = (page - 1) * page_size
    return GroupPage(
        groups=list(groups[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_groups=len(groups),
        total_pages=math.ceil(len(groups) / page_size),
    )


def build_group_page(
    items: Iterable[ConsolidatedItem],
    *,
    status: StatusFilter = StatusFilter.ALL,
    search: str | None = None,
    cfops_na: Collection[str] = (),
    page: int = 1,
) -> GroupPage:
    """Filter, group and paginate in one pass."""

    filtered = filter_items(items, status=status, search=search, cfops_na=cfops_na)
    return paginate(group_by_ncm(filtered), page=page)
