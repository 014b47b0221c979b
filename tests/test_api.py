"""
Tests for the API Endpoints

The database dependency is overridden with the in-memory test database
and the lifespan is not started, so no real database is touched.

Run with: pytest tests/test_api.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.database import DatabaseManager, get_db
from api.main import app
from engine.generator import GenerationRecord

UTC = timezone.utc
START = datetime(2025, 8, 1, 8, 0, tzinfo=UTC)
RECORDS_URL = "/api/energy-generation-records/solar-unit/{}"


def parse_ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def client(session_factory, monkeypatch):
    monkeypatch.delenv("API_AUTH_TOKEN", raising=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    DatabaseManager(db_session).insert_records([
        GenerationRecord("SU-0001", START + timedelta(hours=4), 2.31),
        GenerationRecord("SU-0001", START, 1.62),
        GenerationRecord("SU-0001", START + timedelta(hours=2), -1.75),
        GenerationRecord("SU-0002", START, 0.0),
    ])


class TestGenerationRecords:
    """Test the per-unit records endpoint."""

    def test_records_for_unit(self, client, seeded):
        response = client.get(RECORDS_URL.format("SU-0001"))

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 3
        assert set(body[0]) == {"serialNumber", "timestamp", "energyGenerated"}
        assert all(r["serialNumber"] == "SU-0001" for r in body)

    def test_records_ascending(self, client, seeded):
        body = client.get(RECORDS_URL.format("SU-0001")).json()

        assert [parse_ts(r["timestamp"]) for r in body] == [
            START,
            START + timedelta(hours=2),
            START + timedelta(hours=4),
        ]
        assert [r["energyGenerated"] for r in body] == [1.62, -1.75, 2.31]

    def test_timestamps_are_utc(self, client, seeded):
        body = client.get(RECORDS_URL.format("SU-0002")).json()

        assert parse_ts(body[0]["timestamp"]).utcoffset() == timedelta(0)

    def test_unknown_unit_returns_empty_list(self, client, seeded):
        response = client.get(RECORDS_URL.format("SU-9999"))

        assert response.status_code == 200
        assert response.json() == []


class TestAuthentication:
    """Test bearer-token authentication."""

    def test_missing_token_rejected(self, client, seeded, monkeypatch):
        monkeypatch.setenv("API_AUTH_TOKEN", "s3cret")

        response = client.get(RECORDS_URL.format("SU-0001"))

        assert response.status_code == 401
        body = response.json()
        assert body["error"] is True
        assert body["message"] == "Unauthorized"

    def test_wrong_token_rejected(self, client, seeded, monkeypatch):
        monkeypatch.setenv("API_AUTH_TOKEN", "s3cret")

        response = client.get(
            RECORDS_URL.format("SU-0001"),
            headers={"Authorization": "Bearer wrong"}
        )

        assert response.status_code == 401

    def test_valid_token_accepted(self, client, seeded, monkeypatch):
        monkeypatch.setenv("API_AUTH_TOKEN", "s3cret")

        response = client.get(
            RECORDS_URL.format("SU-0001"),
            headers={"Authorization": "Bearer s3cret"}
        )

        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_system_endpoints_are_public(self, client, monkeypatch):
        monkeypatch.setenv("API_AUTH_TOKEN", "s3cret")

        assert client.get("/live").status_code == 200


class TestSystemEndpoints:
    """Test root and probe endpoints."""

    def test_root(self, client):
        body = client.get("/").json()

        assert body["name"] == "Solar Generation Records API"
        assert body["documentation"] == "/docs"

    def test_live(self, client):
        assert client.get("/live").json() == {"alive": True}

    def test_health_ok(self, client, monkeypatch):
        monkeypatch.setattr(
            "api.main.check_database_health",
            lambda: {"status": "healthy", "records_table_exists": True}
        )

        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["components"]["records_table"] == "ok"

    def test_health_degraded(self, client, monkeypatch):
        monkeypatch.setattr(
            "api.main.check_database_health",
            lambda: {"status": "unhealthy", "connected": False}
        )

        body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["database"] == "unhealthy"

    def test_ready_when_database_down(self, client, monkeypatch):
        monkeypatch.setattr(
            "api.main.check_database_health",
            lambda: {"status": "unhealthy"}
        )

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["message"] == "Database not ready"


class TestOpenAPISchema:
    """Test documented error responses."""

    def setup_method(self):
        self.schema = TestClient(app).get("/openapi.json").json()

    def response_ref(self, path, status_code):
        response = self.schema["paths"][path]["get"]["responses"][status_code]
        return response["content"]["application/json"]["schema"]["$ref"]

    def test_records_documents_unauthorized(self):
        path = "/api/energy-generation-records/solar-unit/{serial_number}"

        assert self.response_ref(path, "401") == "#/components/schemas/ErrorResponse"

    def test_ready_documents_unavailable(self):
        assert self.response_ref("/ready", "503") == "#/components/schemas/ErrorResponse"
