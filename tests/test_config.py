# /tests/test_config.py

import importlib

import pytest

from app.core import config


@pytest.fixture
def reload_config():
    """Re-imports the config module and restores it afterwards."""
    yield lambda: importlib.reload(config)
    importlib.reload(config)


def test_dotenv_is_loaded_on_import(reload_config, mocker):
    load = mocker.patch("dotenv.load_dotenv")

    reload_config()

    load.assert_called_once_with()


def test_settings_come_from_the_environment(reload_config, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://classroom@db/classroom")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = reload_config()

    assert settings.DATABASE_URL == "postgresql://classroom@db/classroom"
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 15
    assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]
