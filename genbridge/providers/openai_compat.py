"""OpenAI-compatible ``chat/completions`` API.

Works against any endpoint speaking the OpenAI chat schema (OpenAI itself,
DeepSeek, OpenRouter, local gateways). Authentication uses a bearer token.
The single choice's message content is either a string or a list of typed
parts; both are reduced to text the same way.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple, Union

from ..base.models import GenerationRequest
from ..base.streaming import join_part_texts
from ..config.defaults import sampling_for
from .base import HttpCall, ProviderStyle, json_headers


def _first_choice(data: Dict[str, Any]) -> Dict[str, Any]:
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        return choices[0]
    return {}


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    return join_part_texts(content)


class OpenAICompatProvider(ProviderStyle):
    name = "openai"

    def build_request(self, request: GenerationRequest, *, base_url: str, api_key: str, stream: bool) -> HttpCall:
        user_content: Union[str, List[Dict[str, Any]]] = request.prompt
        if request.image is not None:
            user_content = [
                {"type": "text", "text": request.prompt},
                {"type": "image_url", "image_url": {"url": request.image.data_uri()}},
            ]
        messages: List[Dict[str, Any]] = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})
        messages.append({"role": "user", "content": user_content})

        temperature, max_tokens = sampling_for(request.reduced_capacity)
        return HttpCall(
            method="POST",
            url=f"{base_url}/chat/completions",
            headers=json_headers(Authorization=f"Bearer {api_key}"),
            json={
                "model": request.model_name,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "stream": stream,
            },
        )

    def parse_response(self, body: Dict[str, Any]) -> str:
        message = _first_choice(body).get("message") or {}
        return _content_text(message.get("content")) if isinstance(message, dict) else ""

    def extract_stream_delta(self, data: Dict[str, Any]) -> Tuple[str, bool]:
        choice = _first_choice(data)
        delta = choice.get("delta") or {}
        text = _content_text(delta.get("content")) if isinstance(delta, dict) else ""
        return text, bool(choice.get("finish_reason"))

    def build_probe_request(self, *, base_url: str, api_key: str) -> HttpCall:
        return HttpCall(
            method="GET",
            url=f"{base_url.rstrip('/')}/models",
            headers={"Authorization": f"Bearer {api_key}"},
        )


__all__ = ["OpenAICompatProvider"]
