"""Project-wide API errors.

Every error leaves the API as ``{"error": <message>}``; validation errors
additionally carry the per-field messages under ``"details"``. Unexpected
exceptions are logged and answered with a generic 500 so internal detail
never reaches the client.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DuplicateError(APIException):
    """A uniqueness rule was violated (game title, review per user and game)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."
    default_code = "duplicate"


class InternalError(APIException):
    """Generic server-side failure; the message is deliberately vague."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
    default_code = "internal_error"


class SlugAllocationError(InternalError):
    """No free slug suffix was found within the configured attempt budget."""

    default_detail = "Could not allocate a unique slug."
    default_code = "slug_exhausted"


def _first_message(data):
    """Return the first human-readable message found in DRF error data."""
    if isinstance(data, dict):
        if "detail" in data:
            return _first_message(data["detail"])
        for value in data.values():
            return _first_message(value)
        return ""
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ""
    return str(data)


def api_exception_handler(exc, context):
    """Render API errors as ``{"error": ...}`` and hide unexpected failures."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", type(view).__name__ if view else "unknown view"
        )
        return Response(
            {"error": InternalError.default_detail},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    original = response.data
    body = {"error": _first_message(original)}
    if isinstance(original, dict) and "detail" not in original:
        body["details"] = original
    elif isinstance(original, list):
        body["details"] = original
    if isinstance(exc, DuplicateError):
        body["code"] = DuplicateError.default_code
    response.data = body
    return response
