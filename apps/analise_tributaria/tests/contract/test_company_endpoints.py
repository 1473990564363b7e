from __future__ import annotations

from collections.abc import Callable

from fastapi.testclient import TestClient


def test_admin_creates_company(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.post(
        "/v1/companies",
        json={
            "name": " Padaria Sol ",
            "cnpj": "98.765.432/0001-10",
            "address": "Rua A, 10",
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Padaria Sol"
    assert body["cnpj"] == "98.765.432/0001-10"
    assert body["address"] == "Rua A, 10"


def test_create_company_requires_name_and_cnpj(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.post(
        "/v1/companies",
        json={"name": "  ", "cnpj": "1"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_non_admin_cannot_create_company(
    client: TestClient, analyst_headers: dict[str, str]
) -> None:
    response = client.post(
        "/v1/companies",
        json={"name": "Padaria Sol", "cnpj": "1"},
        headers=analyst_headers,
    )

    assert response.status_code == 403


def test_company_visibility_depends_on_association(
    client: TestClient,
    admin_headers: dict[str, str],
    analyst_headers: dict[str, str],
    analyst_id: int,
    company_id: int,
    grant_access: Callable[[int, int], None],
) -> None:
    admin_view = client.get("/v1/companies", headers=admin_headers).json()
    assert [company["id"] for company in admin_view] == [company_id]
    assert client.get("/v1/companies", headers=analyst_headers).json() == []

    grant_access(analyst_id, company_id)

    visible = client.get("/v1/companies", headers=analyst_headers).json()
    assert [company["name"] for company in visible] == ["Mercado Central"]


def test_delete_company_returns_204_then_404(
    client: TestClient, admin_headers: dict[str, str], company_id: int
) -> None:
    first = client.delete(f"/v1/companies/{company_id}", headers=admin_headers)
    second = client.delete(f"/v1/companies/{company_id}", headers=admin_headers)

    assert first.status_code == 204
    assert second.status_code == 404
    assert second.json()["code"] == "COMPANY_NOT_FOUND"


def test_list_companies_requires_authentication(client: TestClient) -> None:
    assert client.get("/v1/companies").status_code == 401
