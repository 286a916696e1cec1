"""Pytest configuration for the genbridge test suite.

Every test runs with provider credentials, base URL overrides and config file
pointers removed from the environment so results never depend on the
developer's shell. HTTP is faked with ``httpx.MockTransport``; no test
performs network I/O.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from genbridge.base.logging import ROOT_LOGGER_NAME
from genbridge.base.timeouts import reset_timeout_config
from genbridge.config import reset_config_cache

_ISOLATED_ENV = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_API_KEY",
    "GEMINI_BASE_URL",
    "OPENAI_BASE_URL",
    "GENBRIDGE_CONFIG_FILE",
    "GENBRIDGE_LOCALE",
    "GENBRIDGE_TIMEOUT_CONNECT_SECONDS",
    "GENBRIDGE_TIMEOUT_HTTP_SECONDS",
    "GENBRIDGE_TIMEOUT_STREAM_READ_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear credentials and config pointers; point dotenv at a missing file."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    reset_timeout_config()
    yield
    reset_config_cache()
    reset_timeout_config()


class _JsonListHandler(logging.Handler):
    """Collect JSON log lines emitted under the ``genbridge`` logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"event": None, "raw": record.getMessage()}
        payload.setdefault("level", record.levelname)
        self.events.append(payload)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture()
def log_capture() -> Iterator[_JsonListHandler]:
    """Attach a capturing handler to the shared logger (it does not propagate)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handler = _JsonListHandler()
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
