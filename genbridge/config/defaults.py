"""genbridge.config.defaults
=========================

Central place for small, stable default values. They can be overridden via
environment variables or the optional config file (see
:mod:`genbridge.config`), but provide sensible fallbacks for local use and
tests.

This module intentionally imports nothing from the rest of the package.
"""

from __future__ import annotations

# ---- Provider endpoints ----
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
# Substring of a base URL identifying the Gemini API host.
GEMINI_HOST_FRAGMENT = "generativelanguage.googleapis.com"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# ---- Sampling ----
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 4000
# Reduced-capacity mode: lower temperature, smaller output ceiling.
REDUCED_TEMPERATURE = 0.3
REDUCED_MAX_OUTPUT_TOKENS = 1000

# ---- Presentation ----
DEFAULT_LOCALE = "en"

# ---- CLI ----
CLI_DEFAULT_MODEL = "gemini-2.5-flash"


def sampling_for(reduced_capacity: bool) -> tuple[float, int]:
    """Return ``(temperature, max_output_tokens)`` for the capacity mode."""
    if reduced_capacity:
        return REDUCED_TEMPERATURE, REDUCED_MAX_OUTPUT_TOKENS
    return DEFAULT_TEMPERATURE, DEFAULT_MAX_OUTPUT_TOKENS


__all__ = [
    "GEMINI_DEFAULT_BASE_URL",
    "GEMINI_HOST_FRAGMENT",
    "OPENAI_DEFAULT_BASE_URL",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_OUTPUT_TOKENS",
    "REDUCED_TEMPERATURE",
    "REDUCED_MAX_OUTPUT_TOKENS",
    "DEFAULT_LOCALE",
    "CLI_DEFAULT_MODEL",
    "sampling_for",
]
