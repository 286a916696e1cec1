"""Running full-text buffer for one streamed generation."""

from __future__ import annotations

from typing import Optional

from ..errors import ErrorCode, ProviderError
from .streaming import StreamChunk


class ResponseAccumulator:
    """Owns the full-text buffer of a single in-flight generation.

    Each non-empty fragment is appended and reported as a non-terminal
    :class:`StreamChunk`. :meth:`complete` reports the terminal chunk once;
    later calls return ``None`` however the end of stream was detected.
    """

    def __init__(self) -> None:
        self._text = ""
        self._completed = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def completed(self) -> bool:
        return self._completed

    def add(self, fragment: str) -> Optional[StreamChunk]:
        if not fragment:
            return None
        if self._completed:
            raise RuntimeError("cannot add text after the stream completed")
        self._text += fragment
        return StreamChunk(delta=fragment, text=self._text, finish=False)

    def complete(self) -> Optional[StreamChunk]:
        if self._completed:
            return None
        self._completed = True
        return StreamChunk(delta="", text=self._text, finish=True, drained=True)

    def require_text(self, *, provider: str, model: Optional[str] = None) -> str:
        """Return the final text, raising EMPTY_RESPONSE when it is blank."""
        if not self._text.strip():
            raise ProviderError(
                code=ErrorCode.EMPTY_RESPONSE,
                message="stream finished without any text",
                provider=provider,
                model=model,
            )
        return self._text


__all__ = ["ResponseAccumulator"]
