"""Common base for provider request/response styles.

A provider style is stateless: it turns a :class:`GenerationRequest` into an
HTTP call description and walks its own response schema. Transport, logging
and error conversion stay in the service layer so adding a provider only means
adding a subclass and a :class:`~genbridge.providers.router.ProviderKind`
member.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import httpx

from ..base.errors import ProviderError, status_to_code
from ..base.models import GenerationRequest


@dataclass
class HttpCall:
    """Description of one outbound HTTP request."""

    method: str
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Dict[str, Any]] = None


class ProviderStyle(ABC):
    """Request builder and response parser for one API family."""

    name: str

    @abstractmethod
    def build_request(self, request: GenerationRequest, *, base_url: str, api_key: str, stream: bool) -> HttpCall:
        """Return the generation call for ``request``."""

    @abstractmethod
    def parse_response(self, body: Dict[str, Any]) -> str:
        """Concatenate the text of a non-streaming response body."""

    @abstractmethod
    def extract_stream_delta(self, data: Dict[str, Any]) -> Tuple[str, bool]:
        """Return ``(text, terminal)`` for one parsed stream payload."""

    @abstractmethod
    def build_probe_request(self, *, base_url: str, api_key: str) -> HttpCall:
        """Return the model-listing call used as a connectivity probe."""

    def raise_for_status(self, response: httpx.Response, *, model: Optional[str] = None) -> None:
        """Raise a classified ``ProviderError`` for a non-2xx response.

        The category depends on the status code only; the body is read for a
        better detail message. The response body must already be loaded.
        """
        if response.is_success:
            return
        raise ProviderError(
            code=status_to_code(response.status_code),
            message=f"HTTP {response.status_code}: {error_detail(response)}",
            provider=self.name,
            model=model,
            status=response.status_code,
        )


def error_detail(response: httpx.Response) -> str:
    """Return ``error.message`` from a JSON error body, else the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and isinstance(err.get("message"), str) and err["message"]:
            return err["message"]
        if isinstance(err, str) and err:
            return err
    return response.reason_phrase or "error"


def json_headers(**extra: str) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    headers.update(extra)
    return headers


__all__ = ["HttpCall", "ProviderStyle", "error_detail", "json_headers"]
