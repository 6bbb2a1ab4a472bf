"""Request validation utilities using Pydantic.

Provides a decorator that validates Flask request bodies against Pydantic
schemas and turns validation failures into the standard 400 error body. A
rejected request never reaches the route, so it has no side effects.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import request
from pydantic import BaseModel, ValidationError

from memochat.api.errors import invalid_json_error, missing_field_error, validation_error
from memochat.api.utils import get_request_json
from memochat.utils.logging import get_logger

logger = get_logger(__name__)

# Pydantic error types that mean "the caller did not provide this field"
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def pydantic_to_error_response(
    error: ValidationError,
) -> tuple[dict[str, Any], int]:
    """Convert a Pydantic ValidationError to a standardized API error response.

    Only the first error is reported. Missing or empty required fields get the
    MISSING_FIELD code, anything else (wrong type, non-object body) is a
    VALIDATION_ERROR.
    """
    first_error = error.errors()[0]

    loc = first_error.get("loc", ())
    field = ".".join(str(x) for x in loc) if loc else None
    message = first_error.get("msg", "Invalid input")

    logger.debug(
        "Pydantic validation failed",
        extra={
            "field": field,
            "error_type": first_error.get("type"),
            "error_count": len(error.errors()),
        },
    )

    if field and first_error.get("type") in MISSING_ERROR_TYPES:
        return missing_field_error(field)
    return validation_error(message, field=field)


def validate_request[T: BaseModel](
    schema_class: type[T],
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that validates request JSON against a Pydantic schema.

    Usage:
        @api.route("/chat", methods=["POST"])
        @validate_request(ChatRequest)
        def chat(data: ChatRequest) -> ...:
            ...

    On success the validated model is passed as the first positional argument.
    On failure the standardized 400 error response is returned.
    """

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            data = get_request_json(request)
            if data is None:
                return invalid_json_error()

            try:
                validated = schema_class.model_validate(data)
            except ValidationError as e:
                return pydantic_to_error_response(e)

            return f(validated, *args, **kwargs)

        return wrapper

    return decorator
