"""API Gateway response helper functions."""

import json
from typing import Any

JSON_HEADERS = {"Content-Type": "application/json"}


def _serialize(data: Any) -> str:
    """Serialize data to JSON string."""
    return json.dumps(data, ensure_ascii=False)


def success(data: Any, status_code: int = 200) -> dict:
    """Create a successful API response.

    Args:
        data: JSON-serializable response data.
        status_code: HTTP status code (default 200).

    Returns:
        API Gateway response dict.
    """
    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": _serialize(data),
    }


def error(
    message: str,
    status_code: int = 500,
    error_code: str | None = None,
) -> dict:
    """Create an error API response.

    Internal details are never included; the caller is an external platform.

    Args:
        message: Error message.
        status_code: HTTP status code.
        error_code: Machine-readable error code.

    Returns:
        API Gateway response dict.
    """
    body: dict[str, Any] = {
        "error": True,
        "message": message,
    }

    if error_code:
        body["error_code"] = error_code

    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": _serialize(body),
    }


def from_exception(exc: Any) -> dict:
    """Create an error response from a LineGptError.

    Args:
        exc: Exception carrying message, status_code and error_code.

    Returns:
        API Gateway response dict.
    """
    return error(exc.message, status_code=exc.status_code, error_code=exc.error_code)
