"""Tests for settings loading and logging processors."""

from pathlib import Path

from niklaus.config import get_settings, reset_settings
from niklaus.config.logging import redact_secrets


def test_defaults():
    settings = get_settings()

    assert settings.inference.provider == "gemini"
    assert settings.store.seed_path is None
    assert settings.support.greeting


def test_env_prefixes(monkeypatch):
    monkeypatch.setenv("INFERENCE_PROVIDER", "ollama")
    monkeypatch.setenv("SUPPORT_GREETING", "Bem-vindo!")
    monkeypatch.setenv("STORE_SEED_PATH", "/tmp/seed.json")
    monkeypatch.setenv("API_MAX_SESSIONS", "10")
    reset_settings()

    settings = get_settings()

    assert settings.inference.provider == "ollama"
    assert settings.support.greeting == "Bem-vindo!"
    assert settings.store.seed_path == Path("/tmp/seed.json")
    assert settings.api.max_sessions == 10


def test_settings_singleton():
    assert get_settings() is get_settings()


def test_redact_secrets():
    event = redact_secrets(None, "info", {"event": "auth_signed_in", "password": "x", "uid": "u1"})

    assert event["password"] == "***"
    assert event["uid"] == "u1"
