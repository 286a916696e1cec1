"""
Normalized generation error codes (taxonomy).

Defines the `ErrorCode` enumeration returned as the short error tag on
:class:`~genbridge.base.models.GenerationResult`. Values are lowercase
snake_case and are considered a stable public contract for callers and logs.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    MODEL_NOT_FOUND = "model_not_found"
    NETWORK = "network"
    EMPTY_RESPONSE = "empty_response"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
