"""genbridge package

Unified text-generation client for Gemini-style and OpenAI-compatible HTTP
endpoints.

Purpose:
    Provide one call, :func:`generate`, that picks the API family from the
    base URL and model name, issues a streaming or non-streaming request, and
    always returns a :class:`GenerationResult` (never raises for provider or
    transport failures).

Public API (re-exported):
    - Version: ``__version__``
    - Operations: :func:`generate`, :func:`stream_generate`,
      :func:`check_api_channel`
    - Models: :class:`GenerationRequest`, :class:`GenerationResult`,
      :class:`ProbeResult`, :class:`InlineImage`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ErrorCode, ProviderError
from .base.models import GenerationRequest, GenerationResult, InlineImage, ProbeResult
from .base.streaming import StreamChunk
from .providers import ProviderKind
from .service import check_api_channel, generate, stream_generate

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "generate",
    "stream_generate",
    "check_api_channel",
    "GenerationRequest",
    "GenerationResult",
    "ProbeResult",
    "InlineImage",
    "StreamChunk",
    "ProviderError",
    "ErrorCode",
    "ProviderKind",
    "CancellationToken",
    "CancelledError",
]
