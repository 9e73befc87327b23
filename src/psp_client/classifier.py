"""Map non-2xx HTTP responses onto the :mod:`psp_client.exceptions` hierarchy."""

import json
from typing import Any, Dict, Optional

from .exceptions import (
    ApiError,
    AuthenticationError,
    HttpError,
    ServerError,
    ValidationError,
)

AUTHENTICATION_STATUSES = frozenset([401, 403])
VALIDATION_STATUSES = frozenset([400, 422])

# keeps exception messages readable when a server returns an HTML page
_MAX_BODY_IN_MESSAGE = 200


def parse_error_body(body: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a platform error body, e.g.::

        {"status": 422, "errorCode": "14_003", "message": "Missing amount",
         "errorType": "validation", "pspReference": "8816..."}

    Returns None unless the body is a JSON object carrying at least an
    ``errorCode`` or a ``message``.
    """
    if not body or not body.strip():
        return None
    try:
        parsed = json.loads(body)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    if parsed.get("errorCode") is None and parsed.get("message") is None:
        return None
    return parsed


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _snippet(body: Optional[str]) -> str:
    text = (body or "").strip()
    if len(text) > _MAX_BODY_IN_MESSAGE:
        return text[:_MAX_BODY_IN_MESSAGE] + "..."
    return text


def classify(status_code: int, body: Optional[str]) -> ApiError:
    """
    Build the error for a non-2xx response.

    Never raises and never performs I/O; unparseable bodies degrade to
    the raw body text.
    """
    structured = parse_error_body(body)
    fields = {}
    if structured is not None:
        fields = {
            "error_code": _as_str(structured.get("errorCode")),
            "error_type": _as_str(structured.get("errorType")),
            "psp_reference": _as_str(structured.get("pspReference")),
        }
    detail = _as_str(structured.get("message")) if structured else None

    if status_code in AUTHENTICATION_STATUSES:
        return AuthenticationError(
            detail or ("Unauthorized" if status_code == 401 else "Forbidden"),
            status_code=status_code,
            raw_body=body,
            **fields,
        )

    if status_code in VALIDATION_STATUSES:
        if structured is None:
            return HttpError(
                _snippet(body) or f"Request rejected with status {status_code}",
                status_code=status_code,
                raw_body=body,
            )
        return ValidationError(
            detail or f"Request rejected with status {status_code}",
            status_code=status_code,
            raw_body=body,
            **fields,
        )

    if 500 <= status_code <= 599:
        return ServerError(
            detail or _snippet(body) or f"Server error {status_code}",
            status_code=status_code,
            raw_body=body,
            **fields,
        )

    return HttpError(
        detail or _snippet(body) or f"Unexpected status {status_code}",
        status_code=status_code,
        raw_body=body,
        **fields,
    )
