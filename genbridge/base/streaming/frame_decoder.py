"""Server-sent-event frame decoder.

Turns raw response bytes into ``data:`` payloads. Transport reads do not line
up with frame boundaries: a read may hold several lines, part of a line, or
part of a multi-byte UTF-8 character. The decoder keeps both an incremental
UTF-8 decoder and a carry-over buffer holding the trailing incomplete line, so
the frames produced never depend on how the bytes were chunked. Lines may end
in LF, CRLF or a bare CR.
"""

from __future__ import annotations

import codecs
import re
from typing import Iterable, Iterator, List, Optional

from .streaming import DATA_PREFIX, StreamEvent

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_line(line: str) -> Optional[StreamEvent]:
    """Return the event carried by one complete line, or ``None``.

    The line is trimmed; anything not starting with ``data: `` (blank
    keep-alives, ``event:``/``id:`` fields, ``:`` comments) is discarded.
    """
    trimmed = line.strip()
    if not trimmed.startswith(DATA_PREFIX):
        return None
    return StreamEvent(payload=trimmed[len(DATA_PREFIX):])


class SSEFrameDecoder:
    """Incremental ``data:`` frame decoder with carry-over buffering.

    Feed byte buffers as they arrive with :meth:`feed` and call :meth:`flush`
    once the transport reports end of stream. After the ``[DONE]`` sentinel is
    decoded the decoder is ``done`` and ignores everything else, including
    lines that followed the sentinel in the same buffer.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.done = False

    def feed(self, data: bytes) -> List[StreamEvent]:
        """Decode one transport read and return the frames it completed."""
        if self.done or not data:
            return []
        self._buffer += self._decoder.decode(data)
        return self._drain(final=False)

    def flush(self) -> List[StreamEvent]:
        """Process the unterminated last line at end of stream."""
        if self.done:
            return []
        self._buffer += self._decoder.decode(b"", final=True)
        return self._drain(final=True)

    @property
    def pending(self) -> str:
        """Text received but not yet terminated by a newline."""
        return self._buffer

    def _drain(self, *, final: bool) -> List[StreamEvent]:
        *lines, rest = _LINE_BREAK.split(self._buffer)
        if final:
            lines.append(rest)
            rest = ""
        self._buffer = rest
        events: List[StreamEvent] = []
        for line in lines:
            event = parse_line(line)
            if event is None:
                continue
            events.append(event)
            if event.is_sentinel:
                self.done = True
                self._buffer = ""
                break
        return events


def iter_stream_events(chunks: Iterable[bytes]) -> Iterator[StreamEvent]:
    """Lazily decode an iterable of byte buffers into stream events.

    Stops right after yielding the sentinel without pulling further buffers
    from ``chunks``.
    """
    decoder = SSEFrameDecoder()
    for chunk in chunks:
        yield from decoder.feed(chunk)
        if decoder.done:
            return
    yield from decoder.flush()


__all__ = ["SSEFrameDecoder", "iter_stream_events", "parse_line"]
