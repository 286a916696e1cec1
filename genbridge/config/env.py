"""genbridge.config.env
====================

Environment variable names for provider credentials and helpers to read them.

Gemini keys have historically lived in both ``GEMINI_API_KEY`` and
``GOOGLE_API_KEY``; the canonical name is listed first in ``ENV_ALIASES`` and
wins when both are set. Helpers never raise on unknown providers or unset
variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a real key.

    Heuristics (case-insensitive): contains 'placeholder', 'changeme' or
    'your_api_key', or is only whitespace.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return not v or "placeholder" in v or "changeme" in v or "your_api_key" in v


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first usable key, else ``(None, None)``.

    Placeholder values are skipped.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val.strip(), name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
