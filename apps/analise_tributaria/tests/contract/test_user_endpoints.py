from __future__ import annotations

from fastapi.testclient import TestClient


def test_admin_creates_user_that_can_log_in(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.post(
        "/v1/users",
        json={"username": "novo", "password": "segredo1"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["username"] == "novo"
    assert response.json()["is_admin"] is False

    login = client.post(
        "/v1/auth/login",
        json={"username": "novo", "password": "segredo1"},
    )
    assert login.status_code == 200


def test_create_duplicate_user_returns_409(
    client: TestClient, admin_headers: dict[str, str], analyst_id: int
) -> None:
    response = client.post(
        "/v1/users",
        json={"username": "analista", "password": "outra"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["code"] == "USER_ALREADY_EXISTS"


def test_non_admin_cannot_manage_users(
    client: TestClient, analyst_headers: dict[str, str]
) -> None:
    create = client.post(
        "/v1/users",
        json={"username": "intruso", "password": "segredo1"},
        headers=analyst_headers,
    )
    listing = client.get("/v1/users", headers=analyst_headers)

    assert create.status_code == 403
    assert create.json()["code"] == "FORBIDDEN"
    assert listing.status_code == 403


def test_list_users_is_ordered_and_searchable(
    client: TestClient, admin_headers: dict[str, str], analyst_id: int
) -> None:
    all_users = client.get("/v1/users", headers=admin_headers)
    filtered = client.get("/v1/users", params={"q": "ANAL"}, headers=admin_headers)

    assert [user["username"] for user in all_users.json()] == ["admin", "analista"]
    assert [user["username"] for user in filtered.json()] == ["analista"]


def test_grant_list_and_revoke_company_access(
    client: TestClient,
    admin_headers: dict[str, str],
    analyst_id: int,
    company_id: int,
) -> None:
    path = f"/v1/users/{analyst_id}/companies/{company_id}"

    assert client.put(path, headers=admin_headers).status_code == 204
    assert client.put(path, headers=admin_headers).status_code == 204

    companies = client.get(f"/v1/users/{analyst_id}/companies", headers=admin_headers)
    assert [company["id"] for company in companies.json()] == [company_id]

    assert client.delete(path, headers=admin_headers).status_code == 204
    companies = client.get(f"/v1/users/{analyst_id}/companies", headers=admin_headers)
    assert companies.json() == []


def test_grant_unknown_company_returns_404(
    client: TestClient, admin_headers: dict[str, str], analyst_id: int
) -> None:
    response = client.put(
        f"/v1/users/{analyst_id}/companies/999",
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["code"] == "COMPANY_NOT_FOUND"


def test_list_companies_of_unknown_user_returns_404(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.get("/v1/users/999/companies", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "USER_NOT_FOUND"
