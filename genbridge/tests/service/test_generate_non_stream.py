"""Non-streaming generation: payloads, routing and error results."""

from __future__ import annotations

import httpx
import pytest

from genbridge import ErrorCode, generate
from genbridge.tests.helpers import make_client, request_body

GEMINI_OK = {"candidates": [{"content": {"parts": [{"text": "Hi"}, {"text": " there"}]}}]}


def test_gemini_non_stream_concatenates_parts():
    client = make_client(lambda request: httpx.Response(200, json=GEMINI_OK))
    result = generate("Say hi", "gemini-2.5-flash", api_key="k-123", http_client=client)
    assert result.ok
    assert result.text == "Hi there"
    assert result.error is None
    assert result.provider == "gemini"
    assert result.duration_ms >= 0

    (sent,) = client._transport.requests
    assert sent.method == "POST"
    assert sent.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert sent.url.params["key"] == "k-123"
    assert "alt" not in sent.url.params
    assert request_body(sent)["contents"][0]["parts"] == [{"text": "Say hi"}]


def test_openai_non_stream_uses_bearer_and_custom_base():
    body = {"choices": [{"message": {"role": "assistant", "content": "pong"}, "finish_reason": "stop"}]}
    client = make_client(lambda request: httpx.Response(200, json=body))
    result = generate(
        "ping",
        "deepseek-chat",
        system_instruction="be brief",
        base_url="https://api.deepseek.com/v1/",
        api_key="sk-x",
        http_client=client,
    )
    assert result.text == "pong"
    assert result.provider == "openai"
    (sent,) = client._transport.requests
    assert str(sent.url) == "https://api.deepseek.com/v1/chat/completions"
    assert sent.headers["Authorization"] == "Bearer sk-x"
    payload = request_body(sent)
    assert payload["stream"] is False
    assert payload["messages"][0] == {"role": "system", "content": "be brief"}


def test_gemini_routed_by_base_url_even_for_other_model_names():
    client = make_client(lambda request: httpx.Response(200, json=GEMINI_OK))
    result = generate(
        "x",
        "learnlm-2.0",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        api_key="k",
        http_client=client,
    )
    assert result.provider == "gemini"
    assert client._transport.requests[0].url.path.endswith("models/learnlm-2.0:generateContent")


@pytest.mark.parametrize(
    "status,code,needle",
    [
        (401, ErrorCode.AUTH, "API key is invalid"),
        (403, ErrorCode.AUTH, "API key is invalid"),
        (429, ErrorCode.RATE_LIMIT, "rate limit"),
        (404, ErrorCode.MODEL_NOT_FOUND, "gemini-nope"),
        (500, ErrorCode.UNKNOWN, "HTTP 500: internal"),
    ],
)
def test_http_errors_are_classified_by_status(status, code, needle):
    client = make_client(lambda request: httpx.Response(status, json={"error": {"message": "internal"}}))
    result = generate("x", "gemini-nope", api_key="k", http_client=client)
    assert not result.ok
    assert result.error == code.value
    assert needle in result.text
    assert result.detail == f"HTTP {status}: internal"


@pytest.mark.parametrize("body", ["<html><body>Gateway says no</body></html>", ""])
@pytest.mark.parametrize(
    "status,code,reason",
    [
        (401, ErrorCode.AUTH, "Unauthorized"),
        (429, ErrorCode.RATE_LIMIT, "Too Many Requests"),
        (404, ErrorCode.MODEL_NOT_FOUND, "Not Found"),
    ],
)
def test_non_json_error_bodies_still_classified_by_status(status, code, reason, body):
    client = make_client(lambda request: httpx.Response(status, text=body))
    result = generate("x", "gpt-4o", api_key="sk", http_client=client)
    assert result.error == code.value
    assert result.detail == f"HTTP {status}: {reason}"


def test_gemini_style_inline_data_image_is_accepted():
    client = make_client(lambda request: httpx.Response(200, json=GEMINI_OK))
    image = {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}
    result = generate("describe", "gemini-2.5-flash", image=image, api_key="k", http_client=client)
    assert result.ok
    parts = request_body(client._transport.requests[0])["contents"][0]["parts"]
    assert parts[1] == {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}


def test_invalid_image_reports_compact_detail():
    client = make_client(lambda request: pytest.fail("no request expected"))
    result = generate("describe", "gpt-4o", image={"mimeType": "image/png"}, api_key="sk", http_client=client)
    assert result.error == ErrorCode.UNKNOWN.value
    assert result.detail == "invalid request: image.data: Field required"
    assert "validation error" not in result.text
    assert "errors.pydantic.dev" not in result.text
    assert "\n" not in result.text
    assert client._transport.requests == []


def test_missing_api_key_fails_fast_without_network():
    client = make_client(lambda request: pytest.fail("no request expected"))
    result = generate("x", "gpt-4o", http_client=client)
    assert result.error == ErrorCode.AUTH.value
    assert result.text == "API key is not set. Please configure your OpenAI API key."
    assert client._transport.requests == []


def test_api_key_resolved_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
    client = make_client(lambda request: httpx.Response(200, json=GEMINI_OK))
    result = generate("x", "gemini-2.5-flash", http_client=client)
    assert result.ok
    assert client._transport.requests[0].url.params["key"] == "env-key"


def test_network_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = generate("x", "gpt-4o", api_key="sk", http_client=make_client(handler))
    assert result.error == ErrorCode.NETWORK.value
    assert result.text.startswith("Network connection error")


def test_non_json_body_is_unknown_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>proxy</html>"))
    result = generate("x", "gpt-4o", api_key="sk", http_client=client)
    assert result.error == ErrorCode.UNKNOWN.value
    assert "invalid JSON response" in result.detail


@pytest.mark.parametrize(
    "body",
    [
        {"candidates": []},
        {"candidates": [{"content": {"parts": [{"text": "  "}]}}]},
        {"promptFeedback": {"blockReason": "SAFETY"}},
    ],
)
def test_empty_text_is_empty_response(body):
    client = make_client(lambda request: httpx.Response(200, json=body))
    result = generate("x", "gemini-2.5-flash", api_key="k", http_client=client)
    assert result.error == ErrorCode.EMPTY_RESPONSE.value
    assert result.text == "The AI response was empty. Please check the model configuration or try again."


def test_localized_error_message(monkeypatch):
    client = make_client(lambda request: httpx.Response(401, json={}))
    result = generate("x", "gemini-2.5-flash", api_key="k", http_client=client, locale="zh")
    assert result.error == "auth"
    assert result.text == "API密钥无效或已过期。请检查您的Gemini API密钥配置。"
    monkeypatch.setenv("GENBRIDGE_LOCALE", "zh")
    assert generate("x", "gemini-2.5-flash", api_key="k", http_client=client).text == result.text


def test_invalid_request_is_reported_not_raised():
    result = generate("x", "", api_key="k", http_client=make_client(lambda r: pytest.fail("no request")))
    assert result.error == ErrorCode.UNKNOWN.value
    assert result.text


def test_reduced_capacity_and_image_reach_payload():
    client = make_client(lambda request: httpx.Response(200, json=GEMINI_OK))
    generate(
        "describe",
        "gemini-2.5-flash",
        reduced_capacity=True,
        image={"mime_type": "image/png", "data": "iVBOR"},
        api_key="k",
        http_client=client,
    )
    body = request_body(client._transport.requests[0])
    assert body["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 1000}
    assert body["contents"][0]["parts"][1] == {"inlineData": {"mimeType": "image/png", "data": "iVBOR"}}


def test_generate_logs_start_and_end(log_capture):
    client = make_client(lambda request: httpx.Response(200, json=GEMINI_OK))
    generate("x", "gemini-2.5-flash", api_key="k", http_client=client)
    assert log_capture.named("generate.start")
    end = log_capture.named("generate.end")[-1]
    assert end["provider"] == "gemini"
    assert end["stream"] is False
    assert end["chars"] == len("Hi there")


def test_generate_logs_error_code(log_capture):
    client = make_client(lambda request: httpx.Response(429, json={}))
    generate("x", "gpt-4o", api_key="sk", http_client=client)
    err = log_capture.named("generate.error")[-1]
    assert err["error_code"] == "rate_limit"
    assert err["level"] == "WARNING"
