"""
Structured provider error exception type.

Wraps HTTP, transport and stream failures with a normalized `ErrorCode` so the
generation boundary can translate them into a user-facing result.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable detail suitable for logging (not localized).
        provider: Provider key where the error originated (e.g., ``"gemini"``).
        model: Optional model name associated with the failure.
        status: HTTP status code when the failure came from a response.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
