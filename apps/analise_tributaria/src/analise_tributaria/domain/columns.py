"""Spreadsheet header normalization.

Headers arrive in whatever shape the person exporting the spreadsheet chose
("NCM", "Código NCM", "codigo_ncm", ...). Every header is collapsed into a
canonical key made of lowercase ASCII letters and digits only, and each
consolidated field accepts a short list of such keys.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping
from typing import Any

_NON_ALNUM = re.compile(r"[^a-z0-9]")

NCM_KEYS = ("ncm", "codigoncm")
CFOP_KEYS = ("cfop", "codigocfop")
CCLASSTRIB_KEYS = ("cclasstribsugerido", "cclasstrib")
STATUS_KEYS = ("status",)
RECORD_COUNT_KEYS = ("qtdregistros",)
DESCRIPTION_KEYS = ("descricao", "descricaoproduto")
PRODUCT_NAME_KEYS = ("nomeproduto",)


def normalize_key(header: object) -> str:
    """Return the canonical key for one header cell."""

    text = unicodedata.normalize("NFD", str(header))
    text = "".join(char for char in text if unicodedata.category(char) != "Mn")
    return _NON_ALNUM.sub("", text.lower())


def normalize_row(row: Mapping[Any, Any]) -> dict[str, Any]:
    """Re-key one spreadsheet row by canonical header keys.

    When two headers collapse into the same key the rightmost column wins.
    """

    return {normalize_key(header): value for header, value in row.items()}


def pick(row: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the first non-null value among the accepted keys."""

    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None
