"""Gemini-style ``generateContent`` API.

Request shape::

    POST {base}/models/{model}:generateContent?key={key}
    POST {base}/models/{model}:streamGenerateContent?alt=sse&key={key}

    {"contents": [{"role": "user", "parts": [{"text": ...}, {"inlineData": ...}]}],
     "systemInstruction": {"role": "user", "parts": [{"text": ...}]},
     "generationConfig": {"temperature": ..., "maxOutputTokens": ...}}

Responses (and every SSE payload) carry ``candidates[0].content.parts``; the
text of all parts is concatenated in order.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from ..base.models import GenerationRequest
from ..base.streaming import join_part_texts
from ..config.defaults import sampling_for
from .base import HttpCall, ProviderStyle, json_headers


def _first_candidate(data: Dict[str, Any]) -> Dict[str, Any]:
    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return {}


class GeminiProvider(ProviderStyle):
    name = "gemini"

    def build_request(self, request: GenerationRequest, *, base_url: str, api_key: str, stream: bool) -> HttpCall:
        parts: List[Dict[str, Any]] = [{"text": request.prompt}]
        if request.image is not None:
            parts.append({"inlineData": {"mimeType": request.image.mime_type, "data": request.image.data}})
        temperature, max_tokens = sampling_for(request.reduced_capacity)
        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        if request.system_instruction:
            body["systemInstruction"] = {"role": "user", "parts": [{"text": request.system_instruction}]}

        endpoint = "streamGenerateContent" if stream else "generateContent"
        params = {"alt": "sse", "key": api_key} if stream else {"key": api_key}
        return HttpCall(
            method="POST",
            url=f"{base_url}/models/{request.model_name}:{endpoint}",
            params=params,
            headers=json_headers(),
            json=body,
        )

    def parse_response(self, body: Dict[str, Any]) -> str:
        content = _first_candidate(body).get("content") or {}
        return join_part_texts(content.get("parts") if isinstance(content, dict) else None)

    def extract_stream_delta(self, data: Dict[str, Any]) -> Tuple[str, bool]:
        candidate = _first_candidate(data)
        content = candidate.get("content") or {}
        text = join_part_texts(content.get("parts") if isinstance(content, dict) else None)
        return text, bool(candidate.get("finishReason"))

    def build_probe_request(self, *, base_url: str, api_key: str) -> HttpCall:
        return HttpCall(method="GET", url=f"{base_url.rstrip('/')}/models", params={"key": api_key})


__all__ = ["GeminiProvider"]
