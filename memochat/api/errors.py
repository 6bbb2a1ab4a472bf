"""Standardized error response utilities for the API.

Every error body carries a human-readable ``error`` string, so clients that
only look at ``error`` keep working. ``code`` and ``retryable`` let the browser
UI decide whether to offer a retry.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for API responses."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"  # Invalid input data
    MISSING_FIELD = "MISSING_FIELD"  # Required field missing or empty
    INVALID_FORMAT = "INVALID_FORMAT"  # Body is not a JSON object

    # Server errors
    SERVER_ERROR = "SERVER_ERROR"  # Generic server error
    LLM_ERROR = "LLM_ERROR"  # Reply generation failed outside the provider call


RETRYABLE_ERRORS = {
    ErrorCode.SERVER_ERROR,
    ErrorCode.LLM_ERROR,
}


def is_retryable(code: ErrorCode) -> bool:
    """Check if an error code indicates a retryable error."""
    return code in RETRYABLE_ERRORS


def create_error_response(
    code: ErrorCode,
    message: str,
    *,
    field: str | None = None,
    detail: str | None = None,
) -> dict[str, Any]:
    """Create a standardized error response.

    Args:
        code: Error code enum value
        message: Human-readable error message
        field: Request field the error refers to, if any
        detail: Underlying error text, if any

    Returns:
        Dict like {"error": "...", "code": "...", "retryable": false}
        plus "field" and "detail" when given
    """
    error_data: dict[str, Any] = {
        "error": message,
        "code": code.value,
        "retryable": is_retryable(code),
    }
    if field:
        error_data["field"] = field
    if detail is not None:
        error_data["detail"] = detail
    return error_data


def validation_error(message: str, field: str | None = None) -> tuple[dict[str, Any], int]:
    """Create a validation error response (400)."""
    return create_error_response(ErrorCode.VALIDATION_ERROR, message, field=field), 400


def missing_field_error(field: str) -> tuple[dict[str, Any], int]:
    """Create a missing field error response (400)."""
    return create_error_response(
        ErrorCode.MISSING_FIELD,
        f"Provide user_id and message (missing: {field})",
        field=field,
    ), 400


def invalid_json_error() -> tuple[dict[str, Any], int]:
    """Create an invalid JSON error response (400)."""
    return create_error_response(
        ErrorCode.INVALID_FORMAT,
        "Request body must be a JSON object with user_id and message",
    ), 400


def llm_call_failed_error(detail: str) -> tuple[dict[str, Any], int]:
    """Create the response for an unexpected failure while producing a reply (500)."""
    return create_error_response(ErrorCode.LLM_ERROR, "LLM call failed", detail=detail), 500


def server_error(
    message: str = "An unexpected error occurred. Please try again.",
) -> tuple[dict[str, Any], int]:
    """Create a generic server error response (500).

    Never put internal error details here. Log them server-side instead.
    """
    return create_error_response(ErrorCode.SERVER_ERROR, message), 500
