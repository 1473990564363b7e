import math

import pytest

from analise_tributaria.domain.rows import (
    ConsolidatedItem,
    cell_text,
    coerce_record_count,
    parse_row,
)


def test_parse_row_builds_item_with_trimmed_fields() -> None:
    item = parse_row(
        {
            "ncm": " 1001 ",
            "cfop": 5102,
            "cclasstribsugerido": " 7 ",
            "qtdregistros": "3",
            "status": " ok ",
            "descricao": " Arroz ",
            "nomeproduto": " Arroz tipo 1 ",
        }
    )

    assert item == ConsolidatedItem(
        ncm="1001",
        cfop="5102",
        cclasstrib_sugerido="7",
        qtd_registros=3,
        status="OK",
        descricao="Arroz",
        nome_produto="Arroz tipo 1",
    )


@pytest.mark.parametrize(
    "row",
    [
        {"ncm": "1001", "cfop": "  "},
        {"ncm": "", "cfop": "5102"},
        {"cfop": "5102"},
        {"ncm": "1001"},
        {},
    ],
)
def test_parse_row_rejects_rows_without_both_codes(row: dict[str, object]) -> None:
    assert parse_row(row) is None


def test_parse_row_applies_defaults() -> None:
    item = parse_row({"ncm": "1001", "cfop": "5102"})

    assert item is not None
    assert item.cclasstrib_sugerido is None
    assert item.status == "OK"
    assert item.qtd_registros == 1
    assert item.descricao == ""
    assert item.nome_produto == ""


def test_parse_row_turns_blank_cclasstrib_into_none() -> None:
    item = parse_row({"ncm": "1001", "cfop": "5102", "cclasstrib": "   "})

    assert item is not None
    assert item.cclasstrib_sugerido is None


def test_parse_row_keeps_explicit_not_available_marker() -> None:
    item = parse_row({"ncm": "1001", "cfop": "5102", "cclasstrib": "N/A"})

    assert item is not None
    assert item.cclasstrib_sugerido == "N/A"


def test_parse_row_falls_back_to_description_for_product_name() -> None:
    item = parse_row(
        {"ncm": "1001", "cfop": "5102", "descricaoproduto": "Feijao", "nomeproduto": ""}
    )

    assert item is not None
    assert item.descricao == "Feijao"
    assert item.nome_produto == "Feijao"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 1),
        ("", 1),
        ("abc", 1),
        (math.nan, 1),
        (math.inf, 1),
        ("Infinity", 1),
        (0, 1),
        (-4, 1),
        (5, 5),
        (" 12 ", 12),
        (2.9, 2),
        (True, 1),
    ],
)
def test_coerce_record_count(raw: object, expected: int) -> None:
    assert coerce_record_count(raw) == expected


def test_cell_text_drops_integer_float_suffix() -> None:
    assert cell_text(1001.0) == "1001"
    assert cell_text(12.5) == "12.5"
    assert cell_text(math.nan) == ""
    assert cell_text(None) == ""
