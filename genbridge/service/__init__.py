"""Caller-facing operations: generation and connectivity probe."""

from .generate import StreamCallback, generate, stream_generate
from .probe import check_api_channel

__all__ = ["generate", "stream_generate", "check_api_channel", "StreamCallback"]
