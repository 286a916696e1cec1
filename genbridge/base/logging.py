"""Base structured logging utilities for genbridge.

All modules obtain loggers through :func:`get_logger`, which makes them
children of the shared ``genbridge`` logger. That logger owns a single stderr
handler (JSON by default) whose level comes from ``GENBRIDGE_LOG_LEVEL``.

Events are emitted through :func:`log_event` / :func:`normalized_log_event`
as one JSON object per line. ``normalized_log_event`` guarantees a fixed set
of keys (``phase``, ``error_code``, ``emitted``, ``duration_ms``) so stream
and non-stream events can be filtered the same way.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER_NAME = "genbridge"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_CONSOLE_HANDLER_ATTR = "_genbridge_console_handler"
_FILE_HANDLER_ATTR = "_genbridge_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name (case-insensitive), falling back to ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``genbridge`` logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    desired_level = _parse_level(os.getenv("GENBRIDGE_LOG_LEVEL"), default=level)
    console = [h for h in logger.handlers if getattr(h, _CONSOLE_HANDLER_ATTR, False)]
    if console:
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the shared logger or one of its children.

    Names outside the ``genbridge`` namespace are prefixed so every logger
    obtained here propagates to the configured base handler.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == ROOT_LOGGER_NAME:
        return base_logger
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired level (numeric or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When provided, attach a rotating file handler writing to this path
        (replacing a previously attached one). When ``None``, remove any file
        handler attached by this function.
    json_mode: bool
        Use the JSON formatter (default) or the plain text one.

    Returns
    -------
    logging.Logger
        The configured ``genbridge`` logger.
    """
    logger = get_logger(json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
    for h in logger.handlers:
        h.setLevel(logger.level)
        if getattr(h, _CONSOLE_HANDLER_ATTR, False):
            h.setFormatter(_make_formatter(json_mode))

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_make_formatter(json_mode))
            return logger
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if abs_path is None:
        return logger

    directory = os.path.dirname(abs_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    ``None``-valued fields are dropped unless ``keep_none`` is set, in which
    case they are serialized as JSON ``null``.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "emitted", "duration_ms")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: int | None = None,
    duration_ms: float | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized keys.

    ``phase``, ``emitted`` and ``duration_ms`` are always present (possibly
    ``null``); ``error_code`` appears only when set. Extra fields never
    overwrite the normalized ones.
    """
    base_fields: Dict[str, Any] = {
        "phase": phase,
        "emitted": emitted,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
