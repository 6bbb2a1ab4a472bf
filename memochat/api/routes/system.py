"""System routes: liveness and readiness checks."""

from typing import Any

from apiflask import APIBlueprint

from memochat.api.utils import get_db
from memochat.config import Config
from memochat.db.models import check_database_connectivity
from memochat.utils.logging import get_logger

logger = get_logger(__name__)

api = APIBlueprint("system", __name__, url_prefix="/api", tag="System")


@api.route("/health", methods=["GET"])
def health_check() -> tuple[dict[str, str], int]:
    """Liveness probe - checks if the application process is running.

    Does not touch the database. Use /api/ready for dependency checks.
    """
    return {
        "status": "ok",
        "mode": "offline" if Config.is_offline() else "live",
    }, 200


@api.route("/ready", methods=["GET"])
@api.doc(responses=[503])
def readiness_check() -> tuple[dict[str, Any], int]:
    """Readiness probe - checks if the application can serve traffic.

    Verifies the database file is reachable and that the startup fact table
    migration succeeded.

    Returns:
        200: Application is ready to serve traffic
        503: Application is not ready
    """
    db = get_db()
    checks: dict[str, dict[str, Any]] = {}

    db_ok, db_error = check_database_connectivity(db.db_path)
    checks["database"] = {
        "status": "ok" if db_ok else "error",
        "message": "Connected" if db_ok else db_error,
    }

    migration = db.migration_result
    checks["fact_migration"] = {
        "status": "ok" if migration.success else "error",
        **migration.to_dict(),
    }

    is_ready = db_ok and migration.success
    if is_ready:
        logger.debug("Readiness check passed")
    else:
        logger.warning("Readiness check failed", extra={"checks": checks})

    return {
        "status": "ready" if is_ready else "not_ready",
        "checks": checks,
    }, 200 if is_ready else 503
