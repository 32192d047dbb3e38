"""
End-to-end checks of the user service over HTTP.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from shopapi.core.metrics import USER_METRICS
from shopapi.user_app import create_user_app


@pytest.fixture()
def client(temp_db):
    with TestClient(create_user_app()) as test_client:
        yield test_client


def _requests_total() -> float:
    return USER_METRICS.registry.get_sample_value("user_requests_total")


def _created_total() -> float:
    return USER_METRICS.registry.get_sample_value("users_created_total")


def test_health_reports_service_name(client):
    resp = client.get("/api/users/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "UP", "service": "user-service"}


def test_create_user_then_duplicate_email_conflicts(client):
    created_before = _created_total()

    resp = client.post("/api/users", json={"name": "A", "email": "a@x.com"})
    assert resp.status_code == 201
    body = resp.json()
    assert isinstance(body["id"], int)
    assert body["name"] == "A"
    assert body["email"] == "a@x.com"
    assert body["createdAt"]

    dup = client.post("/api/users", json={"name": "B", "email": "a@x.com"})
    assert dup.status_code == 409
    assert dup.content == b""

    assert len(client.get("/api/users").json()) == 1
    assert _created_total() == created_before + 1


def test_client_supplied_id_and_created_at_are_ignored(client):
    resp = client.post(
        "/api/users",
        json={"id": 42, "name": "A", "email": "a@x.com", "createdAt": "2000-01-01T00:00:00Z"},
    )
    body = resp.json()
    assert body["id"] != 42
    assert not body["createdAt"].startswith("2000-01-01")


def test_update_preserves_created_at(client):
    created = client.post("/api/users", json={"name": "A", "email": "a@x.com"}).json()

    resp = client.put(
        f"/api/users/{created['id']}",
        json={"name": "A2", "email": "a2@x.com", "createdAt": "2000-01-01T00:00:00Z"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert (body["name"], body["email"]) == ("A2", "a2@x.com")


def test_update_to_another_users_email_conflicts(client):
    client.post("/api/users", json={"name": "A", "email": "a@x.com"})
    other = client.post("/api/users", json={"name": "B", "email": "b@x.com"}).json()

    resp = client.put(f"/api/users/{other['id']}", json={"name": "B", "email": "a@x.com"})
    assert resp.status_code == 409


def test_unknown_user_is_404(client):
    assert client.get("/api/users/31337").status_code == 404
    assert client.put("/api/users/31337", json={"name": "X", "email": "x@x.com"}).status_code == 404
    assert client.delete("/api/users/31337").status_code == 404


def test_delete_user(client):
    created = client.post("/api/users", json={"name": "A", "email": "a@x.com"}).json()
    assert client.delete(f"/api/users/{created['id']}").status_code == 200
    assert client.get(f"/api/users/{created['id']}").status_code == 404
    # the email is free again
    assert client.post("/api/users", json={"name": "A", "email": "a@x.com"}).status_code == 201


def test_missing_email_is_client_error(client):
    assert client.post("/api/users", json={"name": "A"}).status_code == 422


def test_every_request_is_counted_once(client):
    before = _requests_total()
    client.post("/api/users", json={"name": "A", "email": "a@x.com"})
    client.post("/api/users", json={"name": "B", "email": "a@x.com"})
    client.get("/api/users")
    client.get("/api/users/999")
    client.get("/api/users/health")
    assert _requests_total() == before + 4


def test_id_beyond_storage_range_is_404(client):
    huge = "99999999999999999999"
    assert client.get(f"/api/users/{huge}").status_code == 404
    assert client.put(f"/api/users/{huge}", json={"name": "X", "email": "x@x.com"}).status_code == 404
    assert client.delete(f"/api/users/{huge}").status_code == 404
