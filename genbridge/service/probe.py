"""Connectivity probe for an API channel.

Lists the models of the configured endpoint as a cheap credential and
reachability check. The provider is chosen from the base URL and the channel
name the same way generation chooses it from the model name.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from ..base.constants import PURPOSE_PROBE
from ..base.errors import classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProbeResult
from ..config import get_locale
from ..messages import message
from ..providers import select_provider

_logger = get_logger("service.probe")


def check_api_channel(
    base_url: str,
    api_key: str,
    name: Optional[str] = None,
    *,
    http_client: Optional[httpx.Client] = None,
    locale: Optional[str] = None,
) -> ProbeResult:
    """Probe ``base_url`` with ``api_key`` by listing its models.

    Returns ``success=True`` with the localized "connection succeeded"
    message on a 2xx response, ``HTTP <status>: <reason>`` on any other
    status, and the exception message when the request itself failed.
    """
    started = time.perf_counter()
    provider = select_provider(base_url, name)
    ctx = LogContext(provider=provider.name, model=name, stream=False)
    lang = get_locale(locale)
    call = provider.build_probe_request(base_url=base_url, api_key=api_key)
    client = http_client or get_httpx_client(PURPOSE_PROBE)

    error_code: Optional[str] = None
    try:
        resp = client.request(call.method, call.url, params=call.params, headers=call.headers)
    except Exception as exc:  # noqa: BLE001 - probe reports every failure as a result
        error_code = classify_exception(exc).value
        result = ProbeResult(success=False, message=str(exc) or message("probe_unknown", lang))
    else:
        if resp.is_success:
            result = ProbeResult(success=True, message=message("probe_ok", lang))
        else:
            error_code = f"http_{resp.status_code}"
            result = ProbeResult(success=False, message=f"HTTP {resp.status_code}: {resp.reason_phrase}")

    normalized_log_event(
        _logger,
        "probe.end",
        ctx,
        phase="finalize",
        error_code=error_code,
        emitted=False,
        duration_ms=(time.perf_counter() - started) * 1000.0,
        level=logging.INFO if result.success else logging.WARNING,
        success=result.success,
    )
    return result


__all__ = ["check_api_channel"]
