import math

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from job_roles_api.config import get_settings
from job_roles_api.dependencies import get_job_roles_repository, get_job_roles_service
from job_roles_api.main import app
from job_roles_api.routes import parse_job_role_id


class BrokenRepository:
    def find_all(self):
        raise OperationalError("SELECT * FROM job_roles", {}, Exception("disk I/O error"))


class ExplodingService:
    def find_all(self):
        raise RuntimeError("unexpected bug")


def _create(client: TestClient, **payload: object) -> dict:
    response = client.post("/job-roles", json=payload)
    assert response.status_code == 201
    return response.json()


def test_list_returns_empty_array(client: TestClient) -> None:
    response = client.get("/job-roles")

    assert response.status_code == 200
    assert response.json() == []


def test_create_then_read_round_trip(client: TestClient) -> None:
    created = _create(client, title="Software Engineer", description="Develops software")

    assert created["id"] == 1
    assert created["title"] == "Software Engineer"
    assert created["description"] == "Develops software"
    assert created["createdAt"] == created["updatedAt"]

    response = client.get(f"/job-roles/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_list_returns_created_entities(client: TestClient) -> None:
    _create(client, title="Software Engineer")
    _create(client, title="Data Analyst", description=None)

    response = client.get("/job-roles")

    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Software Engineer", "Data Analyst"]


@pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   ", "description": "x"}])
def test_create_without_title_returns_400_and_persists_nothing(
    client: TestClient, payload: dict
) -> None:
    response = client.post("/job-roles", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Job role title is required"}
    assert client.get("/job-roles").json() == []


def test_create_with_unknown_field_returns_400(client: TestClient) -> None:
    response = client.post("/job-roles", json={"title": "Engineer", "salary": 10})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


@pytest.mark.parametrize("raw_id", ["0", "-1", "abc", ".5", "-0.9"])
@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_invalid_ids_return_400(client: TestClient, method: str, raw_id: str) -> None:
    kwargs = {"json": {"title": "Updated"}} if method == "put" else {}

    response = client.request(method.upper(), f"/job-roles/{raw_id}", **kwargs)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid job role ID"}


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_missing_entity_returns_404(client: TestClient, method: str) -> None:
    kwargs = {"json": {"title": "Updated"}} if method == "put" else {}

    response = client.request(method.upper(), "/job-roles/999", **kwargs)

    assert response.status_code == 404
    assert response.json() == {"error": "Job role with ID 999 not found"}


@pytest.mark.parametrize("raw_id", ["1.5", "1abc", "01"])
def test_ids_are_read_from_leading_digits(client: TestClient, raw_id: str) -> None:
    created = _create(client, title="Software Engineer")

    response = client.get(f"/job-roles/{raw_id}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_id_beyond_storage_range_returns_404(client: TestClient, method: str) -> None:
    kwargs = {"json": {"title": "Updated"}} if method == "put" else {}

    response = client.request(method.upper(), "/job-roles/99999999999999999999", **kwargs)

    assert response.status_code == 404
    assert response.json() == {"error": "Job role with ID 99999999999999999999 not found"}


def test_update_returns_updated_entity(client: TestClient) -> None:
    created = _create(client, title="Software Engineer", description="Develops software")

    response = client.put(f"/job-roles/{created['id']}", json={"title": "Staff Engineer"})

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Staff Engineer"
    assert body["description"] == "Develops software"
    assert body["createdAt"] == created["createdAt"]
    assert body["updatedAt"] >= created["updatedAt"]


def test_update_with_empty_description_persists_it(client: TestClient) -> None:
    created = _create(client, title="Software Engineer", description="Develops software")

    response = client.put(f"/job-roles/{created['id']}", json={"description": ""})

    assert response.status_code == 200
    assert client.get(f"/job-roles/{created['id']}").json()["description"] == ""


def test_update_with_null_description_clears_it(client: TestClient) -> None:
    created = _create(client, title="Software Engineer", description="Develops software")

    response = client.put(f"/job-roles/{created['id']}", json={"description": None})

    assert response.status_code == 200
    assert response.json()["description"] is None


def test_update_with_blank_title_returns_400(client: TestClient) -> None:
    created = _create(client, title="Software Engineer")

    response = client.put(f"/job-roles/{created['id']}", json={"title": "  "})

    assert response.status_code == 400
    assert response.json() == {"error": "Job role title cannot be empty"}


def test_create_delete_then_read_returns_404(client: TestClient) -> None:
    created = _create(client, title="Software Engineer", description="Develops software")
    assert created["id"] == 1

    response = client.delete("/job-roles/1")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get("/job-roles/1").status_code == 404


def test_database_error_returns_500_with_message(client: TestClient) -> None:
    app.dependency_overrides[get_job_roles_repository] = lambda: BrokenRepository()

    response = client.get("/job-roles")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to retrieve job roles"}


def test_unexpected_error_hides_details_in_production(sqlite_url: str) -> None:
    app.dependency_overrides[get_job_roles_service] = lambda: ExplodingService()

    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/job-roles")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_unexpected_error_includes_stack_in_development(
    sqlite_url: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("APP_ENV", "development")
    get_settings.cache_clear()
    app.dependency_overrides[get_job_roles_service] = lambda: ExplodingService()

    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/job-roles")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal Server Error"
    assert "RuntimeError: unexpected bug" in body["stack"]


def test_parse_job_role_id() -> None:
    assert parse_job_role_id("42") == 42
    assert parse_job_role_id(" -3 ") == -3
    assert math.isnan(parse_job_role_id("abc"))
    assert parse_job_role_id("1.5") == 1
    assert parse_job_role_id("1abc") == 1
    assert math.isnan(parse_job_role_id(".5"))
    assert math.isnan(parse_job_role_id("x1"))

    with pytest.raises(ValueError, match="ID parameter is required"):
        parse_job_role_id("")
