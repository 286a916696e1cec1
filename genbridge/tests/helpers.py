"""Shared fakes for transport-level tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List

import httpx


class ChunkedStream(httpx.SyncByteStream):
    """Response body delivered as the given byte buffers, one read each."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = list(chunks)
        self.reads = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            self.reads += 1
            yield chunk

    def close(self) -> None:
        self.closed = True


class RecordingTransport(httpx.MockTransport):
    """``MockTransport`` that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=RecordingTransport(handler))


def sse_frame(obj: Any) -> bytes:
    """One ``data:`` line carrying ``obj`` as JSON."""
    return f"data: {json.dumps(obj, ensure_ascii=False)}\n".encode("utf-8")


def gemini_chunk(text: str, finish_reason: str | None = None) -> Dict[str, Any]:
    candidate: Dict[str, Any] = {"content": {"role": "model", "parts": [{"text": text}]}}
    if finish_reason:
        candidate["finishReason"] = finish_reason
    return {"candidates": [candidate]}


def openai_chunk(text: str | None, finish_reason: str | None = None) -> Dict[str, Any]:
    delta: Dict[str, Any] = {} if text is None else {"content": text}
    return {"choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}]}


def request_body(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content.decode("utf-8"))
