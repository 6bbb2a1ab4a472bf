"""Integration tests for health, readiness and the browser UI."""

from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING

import pytest
from flask.testing import FlaskClient

from memochat.db.migrator import MigrationResult
from memochat.utils.logging import JSONFormatter, get_request_id, request_id_var

if TYPE_CHECKING:
    from memochat.db.models import Database


class TestHealth:
    def test_offline_mode(self, client: FlaskClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok", "mode": "offline"}

    def test_live_mode(self, client: FlaskClient, live_mode: None) -> None:
        response = client.get("/api/health")

        assert response.get_json()["mode"] == "live"


class TestReady:
    def test_ready(self, client: FlaskClient) -> None:
        response = client.get("/api/ready")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "ready"
        assert data["checks"]["database"]["status"] == "ok"
        assert data["checks"]["fact_migration"]["success"] is True

    def test_not_ready_after_failed_migration(
        self, client: FlaskClient, test_database: Database
    ) -> None:
        test_database.migration_result = MigrationResult(
            success=False, failed_step="copy", error="disk I/O error"
        )

        response = client.get("/api/ready")

        assert response.status_code == 503
        data = response.get_json()
        assert data["status"] == "not_ready"
        assert data["checks"]["fact_migration"]["failed_step"] == "copy"


class TestRequestId:
    """Request IDs in log records."""

    def test_header_id_reaches_log_records(
        self, client: FlaskClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        # Keep the request context open so records can be formatted inside it
        with client, caplog.at_level(logging.INFO, logger="memochat.app"):
            response = client.get("/api/health", headers={"X-Request-ID": "req-abc"})

            assert response.status_code == 200
            assert get_request_id() == "req-abc"
            records = [r for r in caplog.records if r.getMessage() == "Incoming request"]
            assert records
            data = json.loads(JSONFormatter().format(records[0]))
            assert data["request_id"] == "req-abc"

    def test_generated_id_when_header_missing(self, client: FlaskClient) -> None:
        with client:
            client.get("/api/health")
            request_id = get_request_id()

        assert request_id is not None
        assert uuid.UUID(request_id)

    def test_id_cleared_after_request(self, client: FlaskClient) -> None:
        """Logs written after a request on the same thread carry no stale ID."""
        client.get("/api/health", headers={"X-Request-ID": "req-abc"})

        assert request_id_var.get() is None
        assert get_request_id() is None


class TestFrontend:
    def test_index_served(self, client: FlaskClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert b"<html" in response.data.lower()

    def test_unknown_static_file(self, client: FlaskClient) -> None:
        assert client.get("/missing.js").status_code == 404
