"""Streaming metrics collected by the streaming adapter for finalize logging."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class StreamMetrics:
    """Per-invocation streaming counters.

    Attributes:
        emitted: Non-empty deltas handed to the consumer.
        skipped: Frames dropped because their payload was not valid JSON.
        time_to_first_token_ms: Delay from stream start to the first delta.
        total_duration_ms: Delay from stream start to the terminal event.
    """

    emitted: int = 0
    skipped: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None


__all__ = ["StreamMetrics"]
