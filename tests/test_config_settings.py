import pytest

from cryptochat.config import ConfigurationError, Settings


def test_missing_keys_are_fatal(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("COINGECKO_API_KEY", raising=False)

    settings = Settings(_env_file=None)

    with pytest.raises(ConfigurationError) as excinfo:
        settings.ensure_required()

    assert "ANTHROPIC_API_KEY" in str(excinfo.value)
    assert "COINGECKO_API_KEY" in str(excinfo.value)


def test_keys_and_port_from_environment(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "llm-key")
    monkeypatch.setenv("COINGECKO_API_KEY", "cg-key")
    monkeypatch.setenv("PORT", "3001")

    settings = Settings(_env_file=None)
    settings.ensure_required()

    assert settings.port == 3001
    assert settings.has_llm_key
    assert settings.coingecko_api_key == "cg-key"


def test_llm_key_alias(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setenv("LLM_API_KEY", "alias-key")

    settings = Settings(_env_file=None)

    assert settings.anthropic_api_key == "alias-key"


def test_base_url_trailing_slash_trimmed(monkeypatch):
    monkeypatch.setenv("COINGECKO_BASE_URL", "https://pro-api.coingecko.com/api/v3/")

    settings = Settings(_env_file=None)

    assert settings.coingecko_base_url == "https://pro-api.coingecko.com/api/v3"
