"""Configuration layer.

Merge order for ``get_provider_config(provider)`` (later wins):

1. Built-in defaults (:mod:`genbridge.config.defaults`)
2. Optional config file pointed to by ``GENBRIDGE_CONFIG_FILE`` (JSON, or
   YAML when PyYAML is installed), one section per provider
3. Environment: ``<PROVIDER>_BASE_URL`` and the API key variables from
   :mod:`genbridge.config.env`
4. In-code overrides (``None`` values ignored)

A ``.env`` file (path from ``DOTENV_FILE``, default ``.env``) is loaded once
per process before the environment is read. Existing variables are only
replaced when they hold placeholders.

Example config file::

    gemini:
      base_url: https://my-proxy.example/v1beta
    openai:
      base_url: https://api.deepseek.com/v1
      api_key: sk-...
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import DEFAULT_LOCALE, GEMINI_DEFAULT_BASE_URL, OPENAI_DEFAULT_BASE_URL
from .env import is_placeholder, resolve_provider_key

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL},
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse ``KEY=VALUE`` lines from the dotenv file into ``os.environ``."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    data: Any = {}
    path = os.getenv("GENBRIDGE_CONFIG_FILE")
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            if yaml is not None:
                data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged ``base_url`` / ``api_key`` configuration for a provider."""
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= {k: v for k, v in file_cfg.items() if v is not None}

    if base_url := os.getenv(f"{name.upper()}_BASE_URL"):
        cfg["base_url"] = base_url
    key, _env_name = resolve_provider_key(name)
    if key:
        cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_locale(explicit: Optional[str] = None) -> str:
    """Return the message locale: argument, then ``GENBRIDGE_LOCALE``, then default."""
    return (explicit or os.getenv("GENBRIDGE_LOCALE") or DEFAULT_LOCALE).strip().lower()


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "get_locale",
    "reset_config_cache",
]
