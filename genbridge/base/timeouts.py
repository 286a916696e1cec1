"""Transport timeout configuration.

The generation core applies no timeout of its own; these values only
configure the ``httpx`` transport. They are read from the environment once
and cached.

Supported environment variables (all optional, seconds, must be positive):
    GENBRIDGE_TIMEOUT_CONNECT_SECONDS
    GENBRIDGE_TIMEOUT_HTTP_SECONDS
    GENBRIDGE_TIMEOUT_STREAM_READ_SECONDS (unset: wait indefinitely between
        streamed chunks)
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        http_timeout_seconds: Read/write/pool timeout for non-streaming calls
            and the connectivity probe.
        stream_read_timeout_seconds: Idle time allowed between two streamed
            reads; ``None`` disables the read timeout for streams.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    stream_read_timeout_seconds: float | None = None

    def for_purpose(self, purpose: str) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` for a client purpose (``stream`` or other)."""
        if purpose == "stream":
            return httpx.Timeout(
                self.http_timeout_seconds,
                connect=self.connect_timeout_seconds,
                read=self.stream_read_timeout_seconds,
            )
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read a positive float from the environment, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED  # noqa: PLW0603 - documented module cache
    if _CACHED is None:
        _CACHED = TimeoutConfig(
            connect_timeout_seconds=float(_parse_env_float("GENBRIDGE_TIMEOUT_CONNECT_SECONDS", 10.0)),
            http_timeout_seconds=float(_parse_env_float("GENBRIDGE_TIMEOUT_HTTP_SECONDS", 60.0)),
            stream_read_timeout_seconds=_parse_env_float("GENBRIDGE_TIMEOUT_STREAM_READ_SECONDS", None),
        )
    return _CACHED


def reset_timeout_config() -> None:
    """Drop the cached configuration so the next read re-parses the environment."""
    global _CACHED  # noqa: PLW0603
    _CACHED = None


__all__ = ["TimeoutConfig", "get_timeout_config", "reset_timeout_config"]
