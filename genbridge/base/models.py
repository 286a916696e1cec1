"""
Request and result models for a single generation call.

``GenerationRequest`` is a Pydantic model so inbound values are validated
before any provider builds a payload. ``GenerationResult`` and
``ProbeResult`` are plain dataclasses returned to callers; they never carry
exceptions.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class InlineImage(BaseModel):
    """An image attached inline to the user message.

    Accepts ``mimeType`` as an alias, and a Gemini-style image part
    (``{"inlineData": {"mimeType": ..., "data": ...}}``) is unwrapped, so
    such objects can be passed through unchanged.

    Attributes:
        mime_type: Media type of the image, e.g. ``"image/png"``.
        data: Base64-encoded image bytes (no ``data:`` URI prefix).
    """

    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field(..., min_length=1, alias="mimeType")
    data: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_inline_data(cls, value: Any) -> Any:
        if isinstance(value, dict) and isinstance(value.get("inlineData"), dict):
            return value["inlineData"]
        return value

    def data_uri(self) -> str:
        """Return the image as a ``data:`` URI (OpenAI-style ``image_url``)."""
        return f"data:{self.mime_type};base64,{self.data}"


class GenerationRequest(BaseModel):
    """Everything needed to issue one generation request.

    Attributes:
        prompt: User prompt text.
        model_name: Target model identifier, also used for provider routing.
        system_instruction: Optional system instruction sent as a separate field.
        reduced_capacity: Use the lower temperature and smaller output ceiling.
        image: Optional inline image attachment.
        base_url: Custom API base URL; provider default when ``None``.
        api_key: API key. May be empty here; the generation boundary resolves
            it from configuration and reports an auth error when still missing.
    """

    prompt: str
    model_name: str = Field(..., min_length=1)
    system_instruction: Optional[str] = None
    reduced_capacity: bool = False
    image: Optional[InlineImage] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None


@dataclass
class GenerationResult:
    """Outcome of a generation call.

    When ``error`` is set, ``text`` holds a non-empty localized message meant
    for the end user and ``detail`` holds the underlying error message.
    """

    text: str
    duration_ms: float
    error: Optional[str] = None
    detail: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProbeResult:
    """Outcome of a connectivity probe."""

    success: bool
    message: str


__all__ = ["InlineImage", "GenerationRequest", "GenerationResult", "ProbeResult"]
