from __future__ import annotations

import importlib

import pytest

from structured_gateway.config import DEFAULT_GEMINI_BASE_URL, Settings


def test_settings_require_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STRUCTURED_GATEWAY_GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    import structured_gateway.config as config

    importlib.reload(config)
    config.get_settings.cache_clear()  # type: ignore[attr-defined]

    try:
        with pytest.raises(ValueError):
            config.get_settings()
    finally:
        config.get_settings.cache_clear()  # type: ignore[attr-defined]


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STRUCTURED_GATEWAY_GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "fallback-key")
    monkeypatch.setenv("STRUCTURED_GATEWAY_GEMINI_MODEL", "gemini-2.5-pro")
    monkeypatch.setenv("STRUCTURED_GATEWAY_TIMEOUT", "12.5")
    monkeypatch.setenv("STRUCTURED_GATEWAY_TRANSPORT_RETRIES", "3")
    monkeypatch.setenv("STRUCTURED_GATEWAY_ALLOWED_ORIGINS", "https://a.test, https://b.test,")

    settings = Settings.from_env()

    assert settings.gemini_api_key == "fallback-key"
    assert settings.gemini_model == "gemini-2.5-pro"
    assert settings.gemini_base_url == DEFAULT_GEMINI_BASE_URL
    assert settings.request_timeout == 12.5
    assert settings.transport_retries == 3
    assert settings.allowed_origins == ["https://a.test", "https://b.test"]


def test_config_does_not_load_dotenv() -> None:
    import structured_gateway.config as config

    assert not hasattr(config, "load_dotenv")
