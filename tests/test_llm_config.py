"""Tests for config.llm_config and config.settings — LLMConfig model and edit defaults."""

import pytest

from config.llm_config import LLMConfig
from config.settings import Settings


# ── Construction & defaults ───────────────────────────────────


def test_default_all_none():
    cfg = LLMConfig()
    assert cfg.model is None
    assert cfg.temperature is None
    assert cfg.top_p is None
    assert cfg.response_format is None


def test_validation_temperature_range():
    with pytest.raises(ValueError):
        LLMConfig(temperature=3.0)  # max 2.0


def test_validation_top_p_range():
    with pytest.raises(ValueError):
        LLMConfig(top_p=-0.1)


# ── merge ─────────────────────────────────────────────────────


def test_merge_override_non_none():
    base = LLMConfig(model="gemini/gemini-2.5-flash", temperature=0.7, max_tokens=4096)
    merged = base.merge(LLMConfig(max_tokens=8192))

    assert merged.model == "gemini/gemini-2.5-flash"  # kept from base
    assert merged.max_tokens == 8192                   # overridden
    assert merged.temperature == 0.7
    assert base.max_tokens == 4096                     # base unchanged


# ── to_model_settings ─────────────────────────────────────────


def test_model_settings_core_fields():
    cfg = LLMConfig(temperature=0.7, top_p=0.9, max_tokens=4096, seed=1)
    assert cfg.to_model_settings() == {"temperature": 0.7, "top_p": 0.9, "max_tokens": 4096, "seed": 1}


def test_model_settings_provider_extensions_in_extra_body():
    cfg = LLMConfig(top_k=40, response_format="json_object")
    assert cfg.to_model_settings() == {
        "extra_body": {"top_k": 40, "response_format": {"type": "json_object"}},
    }


def test_model_settings_empty():
    assert LLMConfig().to_model_settings() == {}


# ── Settings ──────────────────────────────────────────────────


def test_edit_llm_config_from_settings():
    s = Settings(_env_file=None, edit_model="anthropic/claude-sonnet-4-5", max_tokens=2048)
    cfg = s.get_edit_llm_config()
    assert cfg.model == "anthropic/claude-sonnet-4-5"
    assert cfg.max_tokens == 2048
    assert cfg.response_format == "json_object"


def test_settings_gateway_defaults():
    s = Settings(_env_file=None)
    assert s.edit_gateway_max_retries == 2
    assert s.edit_gateway_retry_delay == 1.0
    assert s.unknown_patch_key_policy == "accept"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("UNKNOWN_PATCH_KEY_POLICY", "reject")
    monkeypatch.setenv("EDIT_GATEWAY_TIMEOUT", "15")
    s = Settings(_env_file=None)
    assert s.unknown_patch_key_policy == "reject"
    assert s.edit_gateway_timeout == 15.0


def test_settings_reject_unknown_policy(monkeypatch):
    monkeypatch.setenv("UNKNOWN_PATCH_KEY_POLICY", "maybe")
    with pytest.raises(ValueError):
        Settings(_env_file=None)
