from __future__ import annotations

import pytest

from app.core import config as config_module
from app.core.exceptions import ConfigurationError


def test_defaults_are_valid(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("GOVERNING_LAW", raising=False)
    cfg = config_module._build_config("development")
    assert cfg.DATABASE_URL.startswith("sqlite")
    assert cfg.API_PREFIX == "/api/v1"
    assert cfg.GOVERNING_LAW == "New York State"
    assert cfg.is_production is False


def test_production_forces_debug_off_and_requires_db(monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.delenv("DB_CONNECTIVITY_REQUIRED", raising=False)
    cfg = config_module._build_config("production")
    assert cfg.DEBUG is False
    assert cfg.DB_CONNECTIVITY_REQUIRED is True


@pytest.mark.parametrize(
    "name,value",
    [
        ("DATABASE_URL", "mysql://localhost/contracts"),
        ("DATABASE_URL", "postgresql:///contracts"),
        ("API_PREFIX", "api"),
        ("API_PORT", "70000"),
        ("LOG_LEVEL", "chatty"),
        ("CUSTOM_PART_TITLE", "   "),
    ],
)
def test_invalid_settings_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        config_module._build_config("development")
