"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, transport error
detection and message-based heuristics as a fallback for errors raised before
any response exists.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from ..cancellation import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code`` (``httpx.HTTPStatusError``)
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.MODEL_NOT_FOUND,
    429: ErrorCode.RATE_LIMIT,
}


def status_to_code(status: int) -> ErrorCode:
    """Map an HTTP status to an error code, ignoring the response body."""
    return _HTTP_STATUS_MAP.get(status, ErrorCode.UNKNOWN)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for exceptions raised without a response."""
    if "api key" in msg or "unauthorized" in msg or "401" in msg:
        return ErrorCode.AUTH
    if "rate limit" in msg or "429" in msg:
        return ErrorCode.RATE_LIMIT
    if "model" in msg and ("not found" in msg or "does not exist" in msg):
        return ErrorCode.MODEL_NOT_FOUND
    if "network" in msg or "connection" in msg:
        return ErrorCode.NETWORK
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cooperative cancellation.
        3. HTTP status mapping.
        4. Transport-level failures (httpx, sockets, timeouts).
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    status = _extract_status(exc)  # type: ignore[arg-type]
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if isinstance(exc, (httpx.TransportError, httpx.StreamError, ConnectionError, TimeoutError)):
        return ErrorCode.NETWORK
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "status_to_code",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
