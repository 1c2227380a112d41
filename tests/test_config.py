import dataclasses

import pytest

import core.config as config_module
from core.config import DEFAULT_WEBHOOK_URL, ServerConfig


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    # keep a developer's local .env out of these tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)
    monkeypatch.delenv("N8N_WEBHOOK_URL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


def test_defaults_when_environment_is_empty() -> None:
    config = ServerConfig.from_env()
    assert config.webhook_url == DEFAULT_WEBHOOK_URL
    assert config.debug is False
    assert config.request_timeout_s == 60.0
    assert config.user_agent == "N8N-Gemini-MCP-Server/1.0.0"


def test_reads_webhook_url_and_debug(monkeypatch) -> None:
    monkeypatch.setenv("N8N_WEBHOOK_URL", "http://localhost:5678/webhook/gemini-image-gen")
    monkeypatch.setenv("DEBUG", "true")

    config = ServerConfig.from_env()

    assert config.webhook_url == "http://localhost:5678/webhook/gemini-image-gen"
    assert config.debug is True


@pytest.mark.parametrize("raw, expected", [("1", True), ("on", True), ("false", False), ("nope", False)])
def test_debug_flag_parsing(monkeypatch, raw, expected) -> None:
    monkeypatch.setenv("DEBUG", raw)
    assert ServerConfig.from_env().debug is expected


def test_empty_url_falls_back_to_placeholder(monkeypatch) -> None:
    monkeypatch.setenv("N8N_WEBHOOK_URL", "")
    assert ServerConfig.from_env().webhook_url == DEFAULT_WEBHOOK_URL


def test_config_is_frozen() -> None:
    config = ServerConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.webhook_url = "http://elsewhere"
