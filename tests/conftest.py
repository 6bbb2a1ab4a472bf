"""Shared pytest fixtures for memochat tests."""

from __future__ import annotations

import os
import sqlite3
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from flask import Flask
from flask.testing import FlaskClient

if TYPE_CHECKING:
    from memochat.db.models import Database

# Set test environment variables before importing app modules.
# No Gemini credential: tests run offline unless they opt into live mode.
os.environ["FLASK_ENV"] = "testing"
os.environ["GEMINI_API_KEY"] = ""
os.environ["MY_API_KEY"] = ""


# -----------------------------------------------------------------------------
# Database fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def temp_db_dir() -> Generator[Path]:
    """Create a temporary directory for test databases."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(temp_db_dir: Path, request: pytest.FixtureRequest) -> Path:
    """Create unique database path for each test."""
    test_name = request.node.name.replace("[", "_").replace("]", "_").replace("/", "_")
    return temp_db_dir / f"{test_name}.db"


@pytest.fixture
def test_database(test_db_path: Path) -> Generator[Database]:
    """Create isolated, migrated test database for each test."""
    from memochat.db.models import Database

    db = Database(db_path=test_db_path)
    yield db
    db.close()


@pytest.fixture
def count_rows(test_db_path: Path) -> Callable[[str], int]:
    """Count rows in a table of the test database, bypassing the Database class."""

    def _count(table: str) -> int:
        conn = sqlite3.connect(test_db_path)
        try:
            return int(conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0])
        finally:
            conn.close()

    return _count


@pytest.fixture
def fetch_history(test_db_path: Path) -> Callable[[str], list[tuple[str, str, str]]]:
    """Read (message, reply, tone) history rows for a user, oldest first."""

    def _fetch(user_id: str) -> list[tuple[str, str, str]]:
        conn = sqlite3.connect(test_db_path)
        try:
            rows = conn.execute(
                "SELECT message, reply, tone FROM history WHERE user_id = ? ORDER BY rowid",
                (user_id,),
            ).fetchall()
        finally:
            conn.close()
        return [tuple(row) for row in rows]

    return _fetch


# -----------------------------------------------------------------------------
# Flask app fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def app(test_database: Database) -> Flask:
    """Create Flask test application backed by the isolated test database."""
    from memochat.app import create_app

    flask_app = create_app(database=test_database)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create Flask test client."""
    return app.test_client()


# -----------------------------------------------------------------------------
# Gemini fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def live_mode() -> Generator[None]:
    """Pretend a Gemini credential is configured."""
    with patch("memochat.agent.generator.Config.GEMINI_API_KEY", "test-api-key"):
        yield


@pytest.fixture
def mock_gemini_llm(live_mode: None) -> Generator[MagicMock]:
    """Mock ChatGoogleGenerativeAI to avoid real API calls."""
    from tests.mocks.gemini import create_mock_ai_message

    with patch("memochat.agent.generator.ChatGoogleGenerativeAI") as mock:
        mock_instance = MagicMock()
        mock_instance.invoke.return_value = create_mock_ai_message("Test response from LLM")
        mock.return_value = mock_instance
        yield mock
