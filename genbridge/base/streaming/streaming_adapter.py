"""Streaming adapter: the decode → extract → accumulate loop.

``StreamingAdapter.run()`` is a generator. It opens the transport stream
through ``starter`` (a context manager yielding an iterable of byte buffers),
decodes frames, extracts deltas with the provider translator, and yields a
:class:`StreamChunk` per non-empty delta followed by exactly one terminal
chunk. Failures never propagate out of ``run()``: they end the stream with a
terminal chunk carrying a :class:`ProviderError`.

The transport stream is released on every exit path because it is only ever
held inside the ``with`` block, including when the consumer stops iterating
early and the generator is closed.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, ContextManager, Iterable, Iterator, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError, classify_exception
from ..logging import LogContext, log_event, normalized_log_event
from .accumulator import ResponseAccumulator
from .delta_extractor import DeltaTranslator, extract_delta
from .frame_decoder import iter_stream_events
from .streaming import StreamChunk
from .streaming_metrics import StreamMetrics

StreamStarter = Callable[[], ContextManager[Iterable[bytes]]]


class StreamingAdapter:
    """Runs one streamed generation and reports it as ``StreamChunk`` events."""

    def __init__(
        self,
        *,
        ctx: LogContext,
        provider_name: str,
        model: str,
        starter: StreamStarter,
        translator: DeltaTranslator,
        logger: logging.Logger,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self.ctx = ctx
        self.provider_name = provider_name
        self.model = model
        self._starter = starter
        self._translator = translator
        self._logger = logger
        self._cancellation_token = cancellation_token
        self.metrics = StreamMetrics()

    def run(self) -> Iterator[StreamChunk]:
        t0 = time.perf_counter()
        accumulator = ResponseAccumulator()
        try:
            with self._starter() as chunks:
                for event in iter_stream_events(self._guard(chunks)):
                    if event.is_sentinel:
                        break
                    delta = extract_delta(event.payload, self._translator)
                    if delta.parse_failed:
                        self.metrics.skipped += 1
                        log_event(
                            self._logger,
                            "stream.decode_error",
                            self.ctx,
                            level=logging.WARNING,
                            payload=event.payload[:200],
                        )
                        continue
                    chunk = accumulator.add(delta.text)
                    if chunk is not None:
                        self._record_emit(t0)
                        yield chunk
                    if delta.terminal:
                        break
        except Exception as exc:  # noqa: BLE001 - every failure becomes a terminal event
            yield self._terminal_error(exc, accumulator, t0)
            return

        terminal = accumulator.complete()
        if terminal is None:  # pragma: no cover - complete() is called once here
            return
        try:
            accumulator.require_text(provider=self.provider_name, model=self.model)
        except ProviderError as exc:
            terminal.error = exc
        self._finalize(t0, terminal.error)
        yield terminal

    def _guard(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Poll the cancellation token after every transport read."""
        token = self._cancellation_token
        if token is not None:
            token.raise_if_cancelled()
        for chunk in chunks:
            if token is not None:
                token.raise_if_cancelled()
            yield chunk

    def _record_emit(self, t0: float) -> None:
        if self.metrics.emitted == 0:
            self.metrics.time_to_first_token_ms = (time.perf_counter() - t0) * 1000.0
        self.metrics.emitted += 1

    def _terminal_error(self, exc: Exception, accumulator: ResponseAccumulator, t0: float) -> StreamChunk:
        if isinstance(exc, ProviderError):
            error = exc
        else:
            error = ProviderError(
                code=classify_exception(exc),
                message=str(exc) or exc.__class__.__name__,
                provider=self.provider_name,
                model=self.model,
                raw=exc,
            )
        self._finalize(t0, error)
        return StreamChunk(delta="", text=accumulator.text, finish=True, error=error)

    def _finalize(self, t0: float, error: Optional[ProviderError]) -> None:
        self.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
        normalized_log_event(
            self._logger,
            "stream.adapter.end" if error is None else "stream.adapter.error",
            self.ctx,
            phase="finalize",
            error_code=error.code.value if error else None,
            emitted=self.metrics.emitted,
            duration_ms=self.metrics.total_duration_ms,
            level=logging.INFO if error is None else logging.WARNING,
            skipped=self.metrics.skipped,
            time_to_first_token_ms=self.metrics.time_to_first_token_ms,
            error=error.message if error else None,
        )


__all__ = ["StreamingAdapter", "StreamStarter"]
