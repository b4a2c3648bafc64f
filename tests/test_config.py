"""Tests for environment-driven settings."""

import pytest

from status_notifier.config import DEFAULT_STATE_FILE, SUMMARY_URL, load_settings
from status_notifier.errors import ConfigError


@pytest.mark.parametrize("environ", [{}, {"DISCORD_WEBHOOK_URL": ""}, {"DISCORD_WEBHOOK_URL": "   "}])
def test_webhook_url_is_required(environ):
    with pytest.raises(ConfigError, match="DISCORD_WEBHOOK_URL"):
        load_settings(environ)


def test_defaults():
    settings = load_settings({"DISCORD_WEBHOOK_URL": "https://discord.com/api/webhooks/1/abc"})

    assert settings.webhook_url == "https://discord.com/api/webhooks/1/abc"
    assert settings.state_file == DEFAULT_STATE_FILE == "state.json"
    assert settings.log_level == "INFO"
    assert settings.summary_url == SUMMARY_URL


def test_overrides():
    settings = load_settings({
        "DISCORD_WEBHOOK_URL": "https://discord.com/api/webhooks/1/abc",
        "STATE_FILE": ".state/fluxer.json",
        "LOG_LEVEL": "debug",
    })
    assert settings.state_file == ".state/fluxer.json"
    assert settings.log_level == "DEBUG"


def test_blank_state_file_uses_default():
    settings = load_settings({"DISCORD_WEBHOOK_URL": "https://example.test/hook", "STATE_FILE": ""})
    assert settings.state_file == DEFAULT_STATE_FILE


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://example.test/hook")
    monkeypatch.delenv("STATE_FILE", raising=False)
    assert load_settings().webhook_url == "https://example.test/hook"
