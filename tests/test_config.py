from __future__ import annotations

from config import get_settings_module, load_settings


def test_app_env_aliases(monkeypatch):
    monkeypatch.setenv("APP_ENV", "PROD")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"


def test_unknown_env_falls_back_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"
    assert get_settings_module("staging") == "config.development"


def test_testing_settings_are_isolated():
    settings = load_settings("config.testing")
    assert settings.TESTING is True
    assert settings.AUTO_INIT_DB is False
    assert len(settings.JWT_SECRET_KEY) >= 32
