"""Helpers shared by the route modules."""

from typing import Any

from flask import Request, current_app

from memochat.db.models import Database

DATABASE_EXTENSION = "memochat.database"


def get_db() -> Database:
    """Return the Database owned by the running app."""
    db: Database = current_app.extensions[DATABASE_EXTENSION]
    return db


def get_request_json(request: Request) -> Any:
    """Parse the request body as JSON, None if it is missing or malformed."""
    return request.get_json(silent=True)
