"""User-facing messages for error results and probe outcomes.

Messages are looked up by locale and key; unknown locales fall back to
English. Placeholders use ``str.format`` fields (``{model}``, ``{detail}``,
``{provider}``).
"""
from __future__ import annotations

from typing import Dict

from .base.errors import ErrorCode
from .config.defaults import DEFAULT_LOCALE

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        ErrorCode.AUTH.value: "The API key is invalid or has expired. Please check your {provider} API key configuration.",
        ErrorCode.RATE_LIMIT.value: "API rate limit exceeded. Please try again later.",
        ErrorCode.MODEL_NOT_FOUND.value: "Model {model} does not exist or you do not have access to it. Please check the model name or API permissions.",
        ErrorCode.NETWORK.value: "Network connection error. Please check your network connection and try again.",
        ErrorCode.EMPTY_RESPONSE.value: "The AI response was empty. Please check the model configuration or try again.",
        ErrorCode.CANCELLED.value: "The request was cancelled.",
        ErrorCode.UNKNOWN.value: "Error while communicating with {provider}: {detail}",
        "missing_key": "API key is not set. Please configure your {provider} API key.",
        "probe_ok": "Connection succeeded",
        "probe_unknown": "Unknown error",
    },
    "zh": {
        ErrorCode.AUTH.value: "API密钥无效或已过期。请检查您的{provider} API密钥配置。",
        ErrorCode.RATE_LIMIT.value: "API调用频率超限，请稍后重试。",
        ErrorCode.MODEL_NOT_FOUND.value: "模型 {model} 不存在或无权访问。请检查模型名称或API权限。",
        ErrorCode.NETWORK.value: "网络连接错误，请检查网络连接后重试。",
        ErrorCode.EMPTY_RESPONSE.value: "AI响应为空，请检查模型配置或重试",
        ErrorCode.CANCELLED.value: "请求已取消。",
        ErrorCode.UNKNOWN.value: "与{provider}通信时出错: {detail}",
        "missing_key": "API密钥未设置。请配置您的{provider} API密钥。",
        "probe_ok": "连接成功",
        "probe_unknown": "未知错误",
    },
}

PROVIDER_LABELS = {"gemini": "Gemini", "openai": "OpenAI"}


def message(key: str, locale: str = DEFAULT_LOCALE, **fields: str) -> str:
    """Return the localized message for ``key`` with ``fields`` substituted."""
    table = MESSAGES.get(locale.split("-")[0].lower(), MESSAGES[DEFAULT_LOCALE])
    template = table.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    fields.setdefault("model", "")
    fields.setdefault("detail", "")
    provider = fields.get("provider", "")
    fields["provider"] = PROVIDER_LABELS.get(provider, provider)
    return template.format(**fields)


__all__ = ["MESSAGES", "message"]
