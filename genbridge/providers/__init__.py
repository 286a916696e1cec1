"""Provider styles (request builders and response parsers) and routing."""

from .base import HttpCall, ProviderStyle
from .gemini import GeminiProvider
from .openai_compat import OpenAICompatProvider
from .router import ProviderKind, get_provider, select_provider, select_provider_kind

__all__ = [
    "HttpCall",
    "ProviderStyle",
    "GeminiProvider",
    "OpenAICompatProvider",
    "ProviderKind",
    "get_provider",
    "select_provider",
    "select_provider_kind",
]
