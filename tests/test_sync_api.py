from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

import statsync.main as main_module
from statsync.api.deps import get_upsert_service
from statsync.main import app

SYNC_URL = "/api/sync-stats"

INVALID_FORMAT = {"error": "Invalid data format. Expected { players: [...] }"}


@pytest.fixture
def mock_service():
    service = MagicMock()
    app.dependency_overrides[get_upsert_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def mock_client(mock_service):
    with TestClient(app) as test_client:
        yield test_client


def test_sync_valid_batch(client, auth_headers, read_rows):
    response = client.post(
        SYNC_URL,
        json={"players": [{"name": "A", "teamName": "T1", "kills": "5", "deaths": "x"}]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Successfully processed 1 players",
        "processed": 1,
    }
    rows = read_rows()
    assert len(rows) == 1
    assert rows[0]["kills"] == 5
    assert rows[0]["deaths"] == 0


def test_sync_failed_record_rolls_back_batch(client, auth_headers, read_rows):
    response = client.post(
        SYNC_URL,
        json={
            "players": [
                {"name": "A", "teamName": "T1", "kills": 1},
                {"teamName": "T1", "kills": 2},
                {"name": "C", "teamName": "T1", "kills": 3},
            ]
        },
        headers=auth_headers,
    )

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Database operation failed"
    assert "NOT NULL" in body["details"]
    assert read_rows() == []


def test_sync_empty_batch(client, auth_headers):
    response = client.post(SYNC_URL, json={"players": []}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["processed"] == 0
    assert response.json()["message"] == "Successfully processed 0 players"


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE", "PURGE"])
def test_non_post_is_rejected(mock_client, mock_service, auth_headers, method):
    response = mock_client.request(method, SYNC_URL, headers=auth_headers)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    mock_service.upsert_batch.assert_not_called()


def test_unknown_path_keeps_default_not_found(mock_client):
    response = mock_client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}


@pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}, {"x-api-key": ""}])
@pytest.mark.parametrize("body", [{"players": [{"name": "A", "teamName": "T1"}]}, {"players": "nope"}])
def test_bad_api_key_is_rejected(mock_client, mock_service, headers, body):
    response = mock_client.post(SYNC_URL, json=body, headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    mock_service.upsert_batch.assert_not_called()


@pytest.mark.parametrize(
    "body",
    [
        {"players": "not an array"},
        {"players": None},
        {"players": {"name": "A"}},
        {"data": []},
        [],
        "players",
    ],
)
def test_invalid_body_is_rejected(mock_client, mock_service, auth_headers, body):
    response = mock_client.post(SYNC_URL, json=body, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == INVALID_FORMAT
    mock_service.upsert_batch.assert_not_called()


def test_malformed_json_is_rejected(mock_client, mock_service, auth_headers):
    response = mock_client.post(
        SYNC_URL,
        content=b"{players: [",
        headers={**auth_headers, "content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == INVALID_FORMAT
    mock_service.upsert_batch.assert_not_called()


def test_records_reach_service_coerced(mock_client, mock_service, auth_headers):
    mock_service.upsert_batch.return_value = MagicMock(success=True, processed=2)

    response = mock_client.post(
        SYNC_URL,
        json={"players": [{"name": "A", "teamName": "T1", "kda": "1.5"}, "junk"]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    records = mock_service.upsert_batch.call_args.args[0]
    assert records[0].kda == 1.5
    assert records[1].name is None


def test_health(mock_client):
    response = mock_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "env": "test"}


def test_health_db_up(mock_client):
    response = mock_client.get("/health/db")

    assert response.status_code == 200
    assert response.json()["db"] == "up"


def test_health_db_down(mock_client, monkeypatch):
    def _unavailable():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(main_module, "SessionLocal", _unavailable)

    response = mock_client.get("/health/db")

    assert response.status_code == 503
    assert response.json()["detail"] == "db_unavailable"
