"""Structured logging context object.

:class:`LogContext` carries the fields shared by every event of one
generation call (provider, model, streaming mode) so call sites do not repeat
them.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for generation logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    stream: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
