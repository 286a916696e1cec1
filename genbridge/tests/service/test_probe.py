"""Connectivity probe against both provider styles."""

from __future__ import annotations

import httpx

from genbridge import check_api_channel
from genbridge.tests.helpers import make_client


def test_probe_success_openai_style(log_capture):
    client = make_client(lambda request: httpx.Response(200, json={"data": [{"id": "gpt-4o"}]}))
    result = check_api_channel("https://api.openai.com/v1", "sk-1", "main", http_client=client)
    assert result.success
    assert result.message == "Connection succeeded"
    (sent,) = client._transport.requests
    assert sent.method == "GET"
    assert str(sent.url) == "https://api.openai.com/v1/models"
    assert sent.headers["Authorization"] == "Bearer sk-1"
    end = log_capture.named("probe.end")[-1]
    assert end["success"] is True
    assert end["provider"] == "openai"


def test_probe_gemini_by_name_uses_key_param():
    client = make_client(lambda request: httpx.Response(200, json={"models": []}))
    result = check_api_channel("https://proxy.example/v1beta/", "g-key", "My Gemini", http_client=client)
    assert result.success
    (sent,) = client._transport.requests
    assert sent.url.path == "/v1beta/models"
    assert sent.url.params["key"] == "g-key"
    assert "Authorization" not in sent.headers


def test_probe_http_failure_message():
    client = make_client(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))
    result = check_api_channel("https://api.openai.com/v1", "sk-bad", http_client=client)
    assert not result.success
    assert result.message == "HTTP 401: Unauthorized"


def test_probe_transport_failure_uses_exception_message():
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    result = check_api_channel("https://nowhere.invalid/v1", "sk", http_client=make_client(handler))
    assert not result.success
    assert result.message == "Name or service not known"


def test_probe_localized_success():
    client = make_client(lambda request: httpx.Response(204))
    assert check_api_channel("https://x/v1", "k", http_client=client, locale="zh").message == "连接成功"
