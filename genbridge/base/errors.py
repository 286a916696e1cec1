"""Unified generation error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``genbridge.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, status_to_code

__all__ = ["ErrorCode", "ProviderError", "classify_exception", "status_to_code"]
