from __future__ import annotations

import json
import os

import pytest

from genbridge.config import get_locale, get_provider_config, reset_config_cache
from genbridge.config.defaults import GEMINI_DEFAULT_BASE_URL, OPENAI_DEFAULT_BASE_URL, sampling_for
from genbridge.config.env import (
    ENV_ALIASES,
    ENV_MAP,
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_env_map_contains_expected_keys():
    assert ENV_MAP == {"gemini": "GEMINI_API_KEY", "openai": "OPENAI_API_KEY"}
    assert ENV_ALIASES["gemini"][0] == "GEMINI_API_KEY"


def test_get_env_var_name_and_candidates():
    assert get_env_var_name("OpenAI") == "OPENAI_API_KEY"
    assert get_env_var_name("nope") is None
    assert list(get_env_var_candidates("gemini")) == ["GEMINI_API_KEY", "GOOGLE_API_KEY"]


@pytest.mark.parametrize("value,expected", [("", True), ("  ", True), ("your_api_key_here", True), ("CHANGEME", True), ("sk-real", False), (None, False)])
def test_is_placeholder(value, expected):
    assert is_placeholder(value) is expected


def test_resolve_provider_key_uses_alias_and_skips_placeholders(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "placeholder")
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    assert resolve_provider_key("gemini") == ("g-key", "GOOGLE_API_KEY")
    monkeypatch.setenv("GEMINI_API_KEY", " canonical ")
    assert resolve_provider_key("gemini") == ("canonical", "GEMINI_API_KEY")
    assert resolve_provider_key("openai") == (None, None)


def test_provider_config_defaults():
    assert get_provider_config("gemini") == {"base_url": GEMINI_DEFAULT_BASE_URL}
    assert get_provider_config("openai") == {"base_url": OPENAI_DEFAULT_BASE_URL}


def test_provider_config_merge_order(monkeypatch, tmp_path):
    cfg_file = tmp_path / "genbridge.json"
    cfg_file.write_text(json.dumps({"openai": {"base_url": "https://file.example/v1", "api_key": "file-key"}}), encoding="utf-8")
    monkeypatch.setenv("GENBRIDGE_CONFIG_FILE", str(cfg_file))
    reset_config_cache()
    assert get_provider_config("openai") == {"base_url": "https://file.example/v1", "api_key": "file-key"}

    monkeypatch.setenv("OPENAI_BASE_URL", "https://env.example/v1")
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    assert get_provider_config("openai") == {"base_url": "https://env.example/v1", "api_key": "env-key"}

    merged = get_provider_config("openai", {"base_url": "https://arg.example/v1", "api_key": None})
    assert merged == {"base_url": "https://arg.example/v1", "api_key": "env-key"}


def test_provider_config_yaml_file(monkeypatch, tmp_path):
    pytest.importorskip("yaml")
    cfg_file = tmp_path / "genbridge.yaml"
    cfg_file.write_text("gemini:\n  base_url: https://proxy.example/v1beta\n", encoding="utf-8")
    monkeypatch.setenv("GENBRIDGE_CONFIG_FILE", str(cfg_file))
    reset_config_cache()
    assert get_provider_config("gemini")["base_url"] == "https://proxy.example/v1beta"


def test_dotenv_file_is_loaded_once(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nOPENAI_API_KEY='from-dotenv'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    reset_config_cache()
    try:
        assert get_provider_config("openai")["api_key"] == "from-dotenv"
    finally:
        os.environ.pop("OPENAI_API_KEY", None)


def test_locale_resolution(monkeypatch):
    assert get_locale() == "en"
    monkeypatch.setenv("GENBRIDGE_LOCALE", "zh")
    assert get_locale() == "zh"
    assert get_locale("EN") == "en"


def test_sampling_for_capacity_modes():
    assert sampling_for(False) == (0.7, 4000)
    assert sampling_for(True) == (0.3, 1000)
