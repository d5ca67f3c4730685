"""
Response helpers: turn raw HTTP responses into decoded values or JsbError.

This is the only place server error codes enter the SDK. The ``code`` of the
``{"error": {"code", "message"}}`` envelope is passed through verbatim.
"""

import logging
from typing import Any

import requests

from jsonbank.errors import DEFAULT_ERROR_CODE, JsbError

logger = logging.getLogger(__name__)


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def status_text(response: requests.Response) -> str:
    """Format the HTTP status like '404 Not Found'."""
    reason = getattr(response, "reason", None) or ""
    return f"{response.status_code} {reason}".strip()


def decode(response: requests.Response) -> Any:
    """Decode a JSON response body, raising JsbError on failure.

    Args:
        response: The raw response returned by the dispatcher

    Returns:
        The decoded JSON value

    Raises:
        JsbError: With the server's error code for non-2xx responses, or the
            default code if a 2xx body is not valid JSON
    """
    if not is_success(response):
        raise decode_error(response)

    try:
        return response.json()
    except ValueError as e:
        raise JsbError(DEFAULT_ERROR_CODE, str(e)) from e


def decode_as_text(response: requests.Response) -> str:
    """Return the raw body of a successful response."""
    if not is_success(response):
        raise decode_error(response)
    return response.text


def decode_error(response: requests.Response) -> JsbError:
    """Build the JsbError for a non-2xx response."""
    code = status_text(response)

    try:
        data = response.json()
    except ValueError as e:
        logger.debug("Error response (%s) is not JSON: %s", code, e)
        return JsbError(code, str(e))

    error = data.get("error") if isinstance(data, dict) else None
    if (
        not isinstance(error, dict)
        or not isinstance(error.get("code"), str)
        or not isinstance(error.get("message"), str)
    ):
        return JsbError(code, "Unknown error")

    return JsbError(error["code"], error["message"])
