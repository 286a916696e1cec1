"""Shared HTTP client pool.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so
    repeated generations reuse connections. Clients are keyed by purpose
    (``"chat"``, ``"stream"``, ``"probe"``) because each purpose has its own
    timeout profile from :func:`get_timeout_config`.

Lifecycle:
    All pooled clients are closed at interpreter exit via ``atexit``. Tests
    and applications may call :func:`close_all_clients` explicitly. Callers
    that need a custom transport pass their own ``httpx.Client`` to the
    generation functions instead of using the pool.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose.

    The first request for a purpose creates the client with timeouts from
    :func:`get_timeout_config`; later requests reuse it.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(timeout=get_timeout_config().for_purpose(purpose))
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
