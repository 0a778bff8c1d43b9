from __future__ import annotations

import pytest

from config import load_config


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "DATABASE_NAME", "APP_ENV", "PORT", "CORS_ORIGINS", "API_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    cfg = load_config()
    assert cfg.database_url == "mongodb://localhost:27017"
    assert cfg.database_name == "thirukkural"
    assert cfg.api_prefix == "/api"
    assert cfg.cors_origins == ["*"]
    assert cfg.is_development is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mongodb://db:27017")
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.setenv("APP_ENV", "Development")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    cfg = load_config()
    assert cfg.database_url == "mongodb://db:27017"
    assert cfg.port == 3000
    assert cfg.is_development is True
    assert cfg.cors_origins == ["https://a.example", "https://b.example"]


def test_keyword_overrides_win(monkeypatch):
    monkeypatch.setenv("DATABASE_NAME", "from_env")
    assert load_config(database_name="explicit").database_name == "explicit"


def test_unknown_key():
    with pytest.raises(TypeError):
        load_config(nope=1)
