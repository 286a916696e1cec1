"""Generation entry points.

``generate`` is the caller-facing boundary: it never raises for provider,
transport or validation failures and always returns a
:class:`~genbridge.base.models.GenerationResult`. Failures are classified
into an :class:`~genbridge.base.errors.ErrorCode` and rendered as a localized
message in ``result.text``.

``stream_generate`` is the lower-level generator used by the streaming path.
It yields :class:`~genbridge.base.streaming.StreamChunk` events followed by
exactly one terminal chunk, which carries the error when the stream failed.
"""
from __future__ import annotations

import logging
import time
from contextlib import closing, contextmanager
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.constants import MISSING_API_KEY_ERROR, PURPOSE_CHAT, PURPOSE_STREAM
from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import GenerationRequest, GenerationResult, InlineImage
from ..base.streaming import StreamChunk, StreamingAdapter
from ..config import get_locale, get_provider_config
from ..messages import message
from ..providers import ProviderStyle, select_provider

StreamCallback = Callable[[str, str, bool], Any]

_logger = get_logger("service.generate")


def _resolve_endpoint(provider: ProviderStyle, request: GenerationRequest) -> Tuple[str, str]:
    """Return ``(base_url, api_key)`` for ``request``; fail fast without a key."""
    cfg = get_provider_config(provider.name, {"base_url": request.base_url, "api_key": request.api_key})
    api_key = (cfg.get("api_key") or "").strip()
    if not api_key:
        raise ProviderError(
            code=ErrorCode.AUTH,
            message=MISSING_API_KEY_ERROR,
            provider=provider.name,
            model=request.model_name,
        )
    return str(cfg["base_url"]).rstrip("/"), api_key


def stream_generate(
    request: GenerationRequest,
    *,
    http_client: Optional[httpx.Client] = None,
    cancellation_token: Optional[CancellationToken] = None,
) -> Iterator[StreamChunk]:
    """Stream one generation as ``StreamChunk`` events.

    Each non-terminal chunk carries the new fragment and the full text so far.
    The final chunk has ``finish=True``; ``drained`` is set when the stream
    ended normally (sentinel, finish marker or end of transport), ``error``
    is set when it failed. Exceptions are never raised from this generator.
    """
    provider = select_provider(request.base_url, request.model_name)
    ctx = LogContext(provider=provider.name, model=request.model_name, stream=True)
    try:
        base_url, api_key = _resolve_endpoint(provider, request)
    except ProviderError as exc:
        yield StreamChunk(delta="", text="", finish=True, error=exc)
        return
    call = provider.build_request(request, base_url=base_url, api_key=api_key, stream=True)
    client = http_client or get_httpx_client(PURPOSE_STREAM)

    @contextmanager
    def _open_stream() -> Iterator[Iterable[bytes]]:
        with client.stream(call.method, call.url, params=call.params, headers=call.headers, json=call.json) as resp:
            if resp.is_error:
                resp.read()
                provider.raise_for_status(resp, model=request.model_name)
            yield resp.iter_bytes()

    normalized_log_event(_logger, "stream.start", ctx, phase="start", emitted=False, url=call.url)
    adapter = StreamingAdapter(
        ctx=ctx,
        provider_name=provider.name,
        model=request.model_name,
        starter=_open_stream,
        translator=provider.extract_stream_delta,
        logger=_logger,
        cancellation_token=cancellation_token,
    )
    yield from adapter.run()


def _complete_once(provider: ProviderStyle, request: GenerationRequest, client: httpx.Client) -> str:
    base_url, api_key = _resolve_endpoint(provider, request)
    call = provider.build_request(request, base_url=base_url, api_key=api_key, stream=False)
    resp = client.request(call.method, call.url, params=call.params, headers=call.headers, json=call.json)
    provider.raise_for_status(resp, model=request.model_name)
    try:
        body = resp.json()
    except ValueError as exc:
        raise ProviderError(
            code=ErrorCode.UNKNOWN,
            message=f"invalid JSON response: {exc}",
            provider=provider.name,
            model=request.model_name,
            status=resp.status_code,
            raw=exc,
        ) from exc
    text = provider.parse_response(body) if isinstance(body, dict) else ""
    if not text.strip():
        raise ProviderError(
            code=ErrorCode.EMPTY_RESPONSE,
            message="response contained no text",
            provider=provider.name,
            model=request.model_name,
            status=resp.status_code,
        )
    return text


def _stream_to_callback(
    request: GenerationRequest,
    on_stream_chunk: StreamCallback,
    http_client: Optional[httpx.Client],
    cancellation_token: Optional[CancellationToken],
) -> str:
    """Drive ``stream_generate`` and forward events to the caller's callback.

    The completion call ``("", full_text, True)`` is made once, and only when
    the stream drained; a failed stream raises its error instead.
    """
    with closing(stream_generate(request, http_client=http_client, cancellation_token=cancellation_token)) as chunks:
        for chunk in chunks:
            if not chunk.finish:
                on_stream_chunk(chunk.delta, chunk.text, False)
                continue
            if chunk.drained:
                on_stream_chunk("", chunk.text, True)
            if chunk.is_error():
                raise chunk.error
            return chunk.text
    raise RuntimeError("stream ended without a terminal event")  # pragma: no cover


def _describe_invalid_request(exc: ValidationError) -> str:
    """Summarize validation failures as ``field: reason`` pairs on one line."""
    problems = [
        f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}" for err in exc.errors()
    ]
    return "invalid request: " + "; ".join(problems)


def _error_result(
    exc: Exception,
    *,
    provider: str,
    model: str,
    locale: str,
    started: float,
) -> GenerationResult:
    if isinstance(exc, ValidationError):
        code, detail = ErrorCode.UNKNOWN, _describe_invalid_request(exc)
    elif isinstance(exc, ProviderError):
        code, detail = exc.code, exc.message
    else:
        code, detail = classify_exception(exc), str(exc) or exc.__class__.__name__
    if isinstance(exc, ProviderError) and exc.message == MISSING_API_KEY_ERROR:
        text = message("missing_key", locale, provider=provider)
    else:
        text = message(code.value, locale, provider=provider, model=model, detail=detail)
    return GenerationResult(
        text=text,
        duration_ms=(time.perf_counter() - started) * 1000.0,
        error=code.value,
        detail=detail,
        provider=provider,
        model=model,
    )


def generate(
    prompt: str,
    model_name: str,
    system_instruction: Optional[str] = None,
    reduced_capacity: bool = False,
    image: Optional[Union[InlineImage, Mapping[str, Any]]] = None,
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    on_stream_chunk: Optional[StreamCallback] = None,
    *,
    http_client: Optional[httpx.Client] = None,
    cancellation_token: Optional[CancellationToken] = None,
    locale: Optional[str] = None,
) -> GenerationResult:
    """Generate text for ``prompt`` with ``model_name``.

    The provider is chosen from ``base_url`` and ``model_name``. When
    ``on_stream_chunk`` is given the response is streamed and the callback
    receives ``(delta, accumulated_text, False)`` per fragment and
    ``("", full_text, True)`` once the stream drains; otherwise a single
    request is made.

    Returns:
        GenerationResult: the generated text, or a localized error message
        with ``error`` set to an :class:`ErrorCode` value. Never raises for
        provider or transport failures.
    """
    started = time.perf_counter()
    provider = select_provider(base_url, model_name)
    lang = get_locale(locale)
    ctx = LogContext(provider=provider.name, model=model_name, stream=on_stream_chunk is not None)
    normalized_log_event(_logger, "generate.start", ctx, phase="start", emitted=False)

    try:
        request = GenerationRequest(
            prompt=prompt,
            model_name=model_name,
            system_instruction=system_instruction,
            reduced_capacity=reduced_capacity,
            image=image,
            base_url=base_url,
            api_key=api_key,
        )
        if on_stream_chunk is not None:
            text = _stream_to_callback(request, on_stream_chunk, http_client, cancellation_token)
        else:
            text = _complete_once(provider, request, http_client or get_httpx_client(PURPOSE_CHAT))
    except Exception as exc:  # noqa: BLE001 - boundary converts every failure into a result
        result = _error_result(exc, provider=provider.name, model=model_name, locale=lang, started=started)
        normalized_log_event(
            _logger,
            "generate.error",
            ctx,
            phase="finalize",
            error_code=result.error,
            emitted=False,
            duration_ms=result.duration_ms,
            level=logging.WARNING,
            error=result.detail,
        )
        return result

    result = GenerationResult(
        text=text,
        duration_ms=(time.perf_counter() - started) * 1000.0,
        provider=provider.name,
        model=model_name,
    )
    normalized_log_event(
        _logger,
        "generate.end",
        ctx,
        phase="finalize",
        emitted=True,
        duration_ms=result.duration_ms,
        chars=len(text),
    )
    return result


__all__ = ["generate", "stream_generate", "StreamCallback"]
