from __future__ import annotations

import logging

from rest_framework.views import exception_handler

from .errors import ValidationFailed

logger = logging.getLogger(__name__)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render every API error as ``{"error": "<message>"}``.

    Field-level validation details (DRF serializer errors or ValidationFailed.fields)
    are kept under ``fields`` so forms can highlight inputs.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    payload = {}
    if isinstance(data, dict) and set(data.keys()) == {"detail"}:
        payload["error"] = str(data["detail"])
    else:
        payload["error"] = _first_message(data)
        if isinstance(data, dict):
            payload["fields"] = data
    if isinstance(exc, ValidationFailed) and exc.fields:
        payload["fields"] = exc.fields

    if response.status_code >= 500:
        view = context.get("view")
        logger.error("API error in %s: %s", type(view).__name__ if view else "?", payload["error"])
    response.data = payload
    return response
