"""Base shared constants.

Central location to avoid scattering sentinel strings.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel (ProviderError.message when no key is configured)
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string

# HTTP client pool purposes
PURPOSE_CHAT = "chat"
PURPOSE_STREAM = "stream"
PURPOSE_PROBE = "probe"

__all__ = ["MISSING_API_KEY_ERROR", "PURPOSE_CHAT", "PURPOSE_STREAM", "PURPOSE_PROBE"]
