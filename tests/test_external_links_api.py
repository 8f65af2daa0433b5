"""
HTTP tests for the external links endpoints.

Tests the HTTP layer including authentication, role checks, request
validation and the JSON error envelope.
"""

import sqlite3

import pytest

from external_links_api.app.repositories import SQLiteExternalLinkRepository

BASE = "/api/v1/external-links"

GRAFANA = {
    "name": "Grafana",
    "url": "http://g",
    "active": True,
    "monitoringToolId": 1,
    "clusterIds": [1, 2],
}


def test_create_and_list_links(client, admin_headers):
    response = client.post(BASE, json=[GRAFANA], headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = client.get(BASE, params={"clusterId": 1}, headers=admin_headers)
    assert response.status_code == 200
    (link,) = response.json()
    assert link["id"] == 1
    assert link["name"] == "Grafana"
    assert link["url"] == "http://g"
    assert link["active"] is True
    assert link["monitoringToolId"] == 1
    assert link["clusterIds"] == [1, 2]
    assert link["updatedOn"]


def test_list_without_filter_defaults_to_all_clusters(client, admin_headers):
    client.post(
        BASE,
        json=[GRAFANA, {**GRAFANA, "name": "Kibana", "monitoringToolId": 2, "clusterIds": [5]}],
        headers=admin_headers,
    )

    response = client.get(BASE, headers=admin_headers)

    assert [link["name"] for link in response.json()] == ["Grafana", "Kibana"]


def test_list_tools(client, user_headers):
    response = client.get(f"{BASE}/tools", headers=user_headers)

    assert response.status_code == 200
    tools = response.json()
    assert tools[0] == {"id": 1, "name": "Grafana", "icon": "grafana"}
    assert len(tools) == 10


def test_update_moves_link_between_clusters(client, admin_headers):
    client.post(BASE, json=[GRAFANA], headers=admin_headers)

    response = client.put(BASE, json={**GRAFANA, "id": 1, "clusterIds": [2, 3]}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(BASE, params={"clusterId": 1}, headers=admin_headers).json() == []
    (link,) = client.get(BASE, params={"clusterId": 3}, headers=admin_headers).json()
    assert sorted(link["clusterIds"]) == [2, 3]


def test_delete_link(client, admin_headers, fetch_rows):
    client.post(BASE, json=[GRAFANA], headers=admin_headers)

    response = client.delete(f"{BASE}/1", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(BASE, headers=admin_headers).json() == []
    assert len(fetch_rows("SELECT * FROM external_link")) == 1


def test_update_missing_link_returns_not_found(client, admin_headers):
    response = client.put(BASE, json={**GRAFANA, "id": 42}, headers=admin_headers)

    assert response.status_code == 404
    body = response.json()
    assert body["code"] == 404
    assert body["status"] == "Not Found"
    assert body["errors"][0]["userMessage"] == "external link does not exist"


def test_delete_missing_link_returns_not_found(client, admin_headers):
    response = client.delete(f"{BASE}/42", headers=admin_headers)

    assert response.status_code == 404


def test_store_failure_returns_internal_error(client, admin_headers):
    response = client.post(BASE, json=[{**GRAFANA, "monitoringToolId": 999}], headers=admin_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "Internal Server Error"
    assert body["errors"][0]["userMessage"] == "external link failed to create in db"


def test_read_failure_returns_internal_error(client, admin_headers, monkeypatch):
    def _fail(self):
        raise sqlite3.OperationalError("no such table: external_link")

    monkeypatch.setattr(SQLiteExternalLinkRepository, "find_all_active", _fail)

    response = client.get(BASE, headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["errors"][0]["userMessage"] == "failed to fetch external links"


# ---------------------------------------------------------------------------
# request validation
# ---------------------------------------------------------------------------

def test_malformed_body_is_rejected(client, admin_headers):
    response = client.post(BASE, json=[{"url": "http://g", "monitoringToolId": 1}], headers=admin_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == 400
    assert body["errors"]


def test_single_object_instead_of_list_is_rejected(client, admin_headers):
    response = client.post(BASE, json=GRAFANA, headers=admin_headers)

    assert response.status_code == 400


def test_non_integer_id_is_rejected(client, admin_headers):
    response = client.delete(f"{BASE}/abc", headers=admin_headers)

    assert response.status_code == 400


def test_negative_cluster_filter_is_rejected(client, admin_headers):
    response = client.get(BASE, params={"clusterId": -1}, headers=admin_headers)

    assert response.status_code == 400


def test_non_positive_cluster_ids_are_rejected(client, admin_headers, fetch_rows):
    response = client.post(BASE, json=[{**GRAFANA, "clusterIds": [0]}], headers=admin_headers)

    assert response.status_code == 400
    assert fetch_rows("SELECT * FROM external_link") == []

TOO_LARGE = 2**70


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("DELETE", f"{BASE}/{TOO_LARGE}", {}),
        ("GET", BASE, {"params": {"clusterId": TOO_LARGE}}),
        ("PUT", BASE, {"json": {**GRAFANA, "id": TOO_LARGE}}),
        ("POST", BASE, {"json": [{**GRAFANA, "clusterIds": [TOO_LARGE]}]}),
        ("POST", BASE, {"json": [{**GRAFANA, "monitoringToolId": TOO_LARGE}]}),
    ],
)
def test_ids_beyond_storage_range_are_rejected(client, admin_headers, fetch_rows, method, path, kwargs):
    response = client.request(method, path, headers=admin_headers, **kwargs)

    assert response.status_code == 400
    assert response.json()["code"] == 400
    assert fetch_rows("SELECT * FROM external_link") == []


def test_update_without_id_is_rejected(client, admin_headers, fetch_rows):
    client.post(BASE, json=[GRAFANA], headers=admin_headers)

    response = client.put(BASE, json={**GRAFANA, "name": "Renamed"}, headers=admin_headers)

    assert response.status_code == 400
    assert [row["name"] for row in fetch_rows("SELECT name FROM external_link")] == ["Grafana"]


# ---------------------------------------------------------------------------
# authentication / authorization
# ---------------------------------------------------------------------------

def test_missing_token_is_unauthorized(client):
    response = client.get(BASE)

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["errors"][0]["userMessage"] == "Not authenticated"


def test_invalid_token_is_unauthorized(client):
    response = client.get(BASE, headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_regular_user_cannot_write(client, user_headers):
    assert client.post(BASE, json=[GRAFANA], headers=user_headers).status_code == 403
    assert client.put(BASE, json={**GRAFANA, "id": 1}, headers=user_headers).status_code == 403
    assert client.delete(f"{BASE}/1", headers=user_headers).status_code == 403


def test_regular_user_can_read(client, admin_headers, user_headers):
    client.post(BASE, json=[GRAFANA], headers=admin_headers)

    response = client.get(BASE, params={"clusterId": 2}, headers=user_headers)

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_audit_columns_record_acting_user(client, admin_headers, fetch_rows):
    client.post(BASE, json=[GRAFANA], headers=admin_headers)

    link = fetch_rows("SELECT created_by, updated_by FROM external_link")[0]
    assert link == {"created_by": 7, "updated_by": 7}
