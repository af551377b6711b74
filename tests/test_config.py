"""Settings and startup policy tests."""

import pytest
from fastapi.testclient import TestClient

from brand_analyzer.config import Settings
from brand_analyzer.exceptions import ConfigurationError
from brand_analyzer.main import create_app

DB_VARS = ("DATABASE_URL", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME",
           "DB_SSLMODE", "GEMINI_API_KEY", "OPENAI_API_KEY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in DB_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings(_env_file=None)
    assert s.FETCH_TIMEOUT_SECS == 5.0
    assert s.PORT == 3000
    assert s.GEMINI_API_KEY is None


def test_database_url_from_parts(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_USER", "scraper")
    monkeypatch.setenv("DB_PASSWORD", "p@ss")
    monkeypatch.setenv("DB_NAME", "websites")
    url = Settings(_env_file=None).database_url()
    assert url.startswith("postgresql+psycopg://scraper:")
    assert url.endswith("@db.internal:6543/websites")


def test_database_url_override_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./local.db")
    monkeypatch.setenv("DB_HOST", "ignored")
    assert Settings(_env_file=None).database_url() == "sqlite:///./local.db"


def test_missing_database_config_raises():
    with pytest.raises(ConfigurationError) as exc:
        Settings(_env_file=None).database_url()
    assert "DB_HOST" in str(exc.value)


def test_legacy_api_key_name(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "legacy")
    assert Settings(_env_file=None).GEMINI_API_KEY == "legacy"


def test_startup_fails_without_database_config():
    app = create_app(Settings(_env_file=None))
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass
