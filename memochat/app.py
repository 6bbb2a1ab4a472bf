import sys
import uuid
from typing import Any

from apiflask import APIFlask
from flask import Response, g, request, send_from_directory

from memochat.api.errors import server_error
from memochat.api.routes import register_blueprints
from memochat.api.utils import DATABASE_EXTENSION
from memochat.config import Config
from memochat.db.models import Database
from memochat.utils.logging import clear_request_id, get_logger, set_request_id, setup_logging


def create_app(database: Database | None = None) -> APIFlask:
    """Create and configure the Flask application.

    Args:
        database: Database for the routes to use. A new one at
            Config.DATABASE_PATH is opened (and migrated) when omitted.
    """
    setup_logging()
    logger = get_logger(__name__)

    app = APIFlask(__name__, title="memochat", version="0.1.0", static_folder=None)
    # Fact mappings keep their stored order, and NULL keys from legacy rows
    # cannot be sorted against strings
    app.json.sort_keys = False  # type: ignore[attr-defined]

    app.extensions[DATABASE_EXTENSION] = database or Database()
    logger.info(
        "Flask app created",
        extra={
            "environment": Config.FLASK_ENV,
            "log_level": Config.LOG_LEVEL,
            "offline": Config.is_offline(),
        },
    )

    # Request ID middleware - must be before blueprints
    @app.before_request
    def add_request_id() -> None:
        """Generate and store request ID for correlation."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_request_id(request_id)
        g.request_id = request_id

    @app.before_request
    def log_request() -> None:
        """Log incoming requests."""
        logger.info(
            "Incoming request",
            extra={
                "method": request.method,
                "path": request.path,
                "remote_addr": request.remote_addr,
            },
        )

    @app.teardown_request
    def reset_request_id(error: BaseException | None) -> None:
        """Stop tagging later logs on this thread with the finished request's ID."""
        clear_request_id()

    @app.after_request
    def log_response(response: Response) -> Response:
        """Log outgoing responses."""
        logger.info(
            "Outgoing response",
            extra={
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "content_length": response.content_length,
            },
        )
        return response

    @app.errorhandler(500)
    def handle_internal_error(error: Exception) -> tuple[dict[str, Any], int]:
        """Return the standard error body for unhandled exceptions."""
        original = getattr(error, "original_exception", None) or error
        logger.error(
            "Unhandled exception",
            extra={"path": request.path, "error": str(original)},
            exc_info=original,
        )
        return server_error()

    register_blueprints(app)

    # Browser chat UI
    @app.route("/")
    def index() -> Response:
        return send_from_directory(Config.STATIC_DIR, "index.html")

    @app.route("/<path:path>")
    def static_files(path: str) -> Response:
        return send_from_directory(Config.STATIC_DIR, path)

    return app


def main() -> None:
    """Main entry point."""
    setup_logging()
    logger = get_logger(__name__)

    errors = Config.validate()
    if errors:
        logger.error("Configuration validation failed", extra={"errors": errors})
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    if Config.is_offline():
        logger.warning(
            "GEMINI_API_KEY is not set, replies will be simulated. "
            "Get an API key from https://ai.google.dev/ and set it in .env"
        )

    app = create_app()
    logger.info(
        "Starting memochat",
        extra={
            "port": Config.PORT,
            "environment": Config.FLASK_ENV,
            "model": Config.GEMINI_MODEL,
            "log_level": Config.LOG_LEVEL,
        },
    )
    app.run(host="0.0.0.0", port=Config.PORT, debug=Config.is_development())


if __name__ == "__main__":
    main()
