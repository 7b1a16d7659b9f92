"""Tests for the health endpoint and logging setup."""

import logging
import logging.handlers

import pytest

from app.config import Settings, get_settings, setup_logging


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "healthy", "scheduler": "disabled"}


def test_setup_logging_writes_rotating_files(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    get_settings.cache_clear()
    try:
        setup_logging()
        logging.getLogger("app.test").error("disk full")

        handlers = logging.getLogger().handlers
        rotating = [h for h in handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(rotating) == 2
        for handler in rotating:
            handler.flush()
        assert "disk full" in (tmp_path / "error.log").read_text()
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers.clear()
        get_settings.cache_clear()


def test_database_url_defaults_to_pymysql(monkeypatch):
    monkeypatch.delenv("DATABASE_URL_OVERRIDE", raising=False)
    settings = Settings(_env_file=None, mysql_password="pw")
    assert settings.database_url.startswith("mysql+pymysql://applytrack:pw@localhost:3306/applytrack")


def test_production_requires_secret_key():
    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings(_env_file=None, environment="production", secret_key="changeme")
