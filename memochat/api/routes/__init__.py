"""API routes module - registers all route blueprints.

Route Organization:
- chat.py: POST /chat
- memory.py: GET /memory/<user_id>
- system.py: GET /api/health, GET /api/ready
"""

from apiflask import APIFlask

from memochat.api.routes import chat, memory, system


def register_blueprints(app: APIFlask) -> None:
    """Register all route blueprints with the Flask app.

    Args:
        app: APIFlask application instance
    """
    app.register_blueprint(system.api)
    app.register_blueprint(memory.api)
    app.register_blueprint(chat.api)


__all__ = ["register_blueprints"]
