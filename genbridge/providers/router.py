"""Provider selection.

The decision is made once per call from the custom base URL and the model
name (or, for the connectivity probe, the channel name): Gemini-style when the
base URL points at the Gemini API host or the name mentions ``gemini``,
OpenAI-compatible otherwise.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from ..config.defaults import GEMINI_HOST_FRAGMENT
from .base import ProviderStyle
from .gemini import GeminiProvider
from .openai_compat import OpenAICompatProvider


class ProviderKind(str, Enum):
    """Closed set of supported API families."""

    GEMINI = "gemini"
    OPENAI = "openai"


_PROVIDERS: Dict[ProviderKind, ProviderStyle] = {
    ProviderKind.GEMINI: GeminiProvider(),
    ProviderKind.OPENAI: OpenAICompatProvider(),
}


def select_provider_kind(base_url: Optional[str], name: Optional[str]) -> ProviderKind:
    """Return the API family for a base URL and model (or channel) name."""
    base = (base_url or "").lower()
    label = (name or "").lower()
    if GEMINI_HOST_FRAGMENT in base or "gemini" in label:
        return ProviderKind.GEMINI
    return ProviderKind.OPENAI


def get_provider(kind: ProviderKind) -> ProviderStyle:
    return _PROVIDERS[kind]


def select_provider(base_url: Optional[str], name: Optional[str]) -> ProviderStyle:
    return get_provider(select_provider_kind(base_url, name))


__all__ = ["ProviderKind", "select_provider_kind", "get_provider", "select_provider"]
