"""Streaming primitives.

Small value types passed between the frame decoder, the delta extractor, the
accumulator and stream consumers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ProviderError

DATA_PREFIX = "data: "
SENTINEL = "[DONE]"


@dataclass(frozen=True)
class StreamEvent:
    """One ``data:`` frame decoded from the transport.

    ``payload`` is the text after the ``data: `` prefix: JSON, or the literal
    sentinel ``[DONE]``.
    """

    payload: str

    @property
    def is_sentinel(self) -> bool:
        return self.payload == SENTINEL


@dataclass(frozen=True)
class DeltaResult:
    """Text extracted from one stream event.

    Fields:
      text: concatenated text of the event's parts (may be empty)
      terminal: the provider marked this event as the last one
      parse_failed: the payload was not a JSON object; the event is skipped
    """

    text: str = ""
    terminal: bool = False
    parse_failed: bool = False


@dataclass
class StreamChunk:
    """An event handed to stream consumers.

    Fields:
      delta: the new text fragment ("" on the terminal event)
      text: full text accumulated so far
      finish: True on the single terminal event
      error: set on a terminal event when the stream failed
      drained: True on a terminal event reached by a normal end of stream
        (sentinel, provider finish marker or transport end), including a
        drained stream that produced no text
    """

    delta: str
    text: str
    finish: bool = False
    error: Optional[ProviderError] = None
    drained: bool = False

    def is_error(self) -> bool:
        return self.error is not None


__all__ = ["DATA_PREFIX", "SENTINEL", "StreamEvent", "DeltaResult", "StreamChunk"]
