from __future__ import annotations

import io
from collections.abc import Callable

import pandas as pd
import pytest
from fastapi.testclient import TestClient

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ROWS = [
    ("1001", "5102", "7", 2, "OK", "Arroz", "Arroz tipo 1"),
    ("1001", "5102", "000007", 3, "OK", "Arroz", "Arroz tipo 2"),
    ("1001", "6102", None, 1, "OK", "Arroz", "Arroz tipo 1"),
    ("2002", "6108", "N/A", 4, "AUSENTE", "Milho", "Milho verde"),
    ("3003", "5405", "12", 1, "OK", "Feijao", "Feijao preto"),
]


@pytest.fixture
def uploaded_company(
    client: TestClient,
    admin_headers: dict[str, str],
    company_id: int,
    build_workbook,
) -> int:
    response = client.post(
        "/v1/uploads",
        files={"file": ("base.xlsx", build_workbook(ROWS), XLSX)},
        data={"company_id": str(company_id)},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    return company_id


def test_report_without_uploads_returns_204(
    client: TestClient, admin_headers: dict[str, str], company_id: int
) -> None:
    for path in ("", "/groups", "/export"):
        response = client.get(
            f"/v1/companies/{company_id}/report{path}", headers=admin_headers
        )
        assert response.status_code == 204
        assert response.content == b""


def test_report_returns_latest_batch_with_company_header(
    client: TestClient, admin_headers: dict[str, str], uploaded_company: int
) -> None:
    response = client.get(
        f"/v1/companies/{uploaded_company}/report", headers=admin_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["tabela_consolidada"]) == 5
    assert body["empresa"] == {
        "nome": "Mercado Central",
        "cnpj": "12.345.678/0001-90",
    }
    assert body["resumo"]["total_ausente"] == 2
    assert body["cfops_na"] == ["6102", "6108"]
    assert [case["ncm"] for case in body["casos_ausentes"]] == ["2002"]


def test_report_of_unknown_company_returns_404(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.get("/v1/companies/999/report", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "COMPANY_NOT_FOUND"


def test_report_requires_company_access(
    client: TestClient,
    analyst_headers: dict[str, str],
    analyst_id: int,
    uploaded_company: int,
    grant_access: Callable[[int, int], None],
) -> None:
    path = f"/v1/companies/{uploaded_company}/report"

    assert client.get(path, headers=analyst_headers).status_code == 403

    grant_access(analyst_id, uploaded_company)

    assert client.get(path, headers=analyst_headers).status_code == 200


def test_groups_merge_entries_and_format_class(
    client: TestClient, admin_headers: dict[str, str], uploaded_company: int
) -> None:
    response = client.get(
        f"/v1/companies/{uploaded_company}/report/groups", headers=admin_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 1
    assert body["page_size"] == 10
    assert body["total_groups"] == 3
    assert body["total_pages"] == 1
    first = body["groups"][0]
    assert first["ncm"] == "1001"
    assert first["descricao"] == "Arroz"
    assert [
        (entry["cfop"], entry["cClasstrib_formatado"], entry["qtd_registros"])
        for entry in first["cfops"]
    ] == [("5102", "000007", 5), ("6102", "Não Encontrado", 1)]


def test_groups_filter_by_status_and_text(
    client: TestClient, admin_headers: dict[str, str], uploaded_company: int
) -> None:
    path = f"/v1/companies/{uploaded_company}/report/groups"

    missing = client.get(path, params={"status": "MISSING"}, headers=admin_headers)
    secondary = client.get(
        path,
        params={"status": "UNRESOLVED_SECONDARY", "q": "milho"},
        headers=admin_headers,
    )

    assert [group["ncm"] for group in missing.json()["groups"]] == ["1001", "2002"]
    assert [group["ncm"] for group in secondary.json()["groups"]] == ["2002"]


def test_groups_reject_unknown_status(
    client: TestClient, admin_headers: dict[str, str], uploaded_company: int
) -> None:
    response = client.get(
        f"/v1/companies/{uploaded_company}/report/groups",
        params={"status": "WHATEVER"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_export_returns_grouped_workbook(
    client: TestClient, admin_headers: dict[str, str], uploaded_company: int
) -> None:
    response = client.get(
        f"/v1/companies/{uploaded_company}/report/export", headers=admin_headers
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX
    assert "analise_tributaria.xlsx" in response.headers["content-disposition"]

    frame = pd.read_excel(
        io.BytesIO(response.content),
        sheet_name="Analise",
        dtype=str,
        engine="openpyxl",
    )
    assert list(frame.columns) == ["NCM", "CFOP", "cClasstrib"]
    assert frame.to_dict(orient="records") == [
        {"NCM": "1001", "CFOP": "5102", "cClasstrib": "000007"},
        {"NCM": "1001", "CFOP": "6102", "cClasstrib": "Não Encontrado"},
        {"NCM": "2002", "CFOP": "6108", "cClasstrib": "Não Encontrado"},
        {"NCM": "3003", "CFOP": "5405", "cClasstrib": "000012"},
    ]
