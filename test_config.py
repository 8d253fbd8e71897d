# Di dalam file: test_config.py

from config import Settings
from schemas import Madhab


def test_default():
    settings = Settings(_env_file=None)
    assert settings.default_madhab == Madhab.SHAFII
    assert "http://localhost:3000" in settings.cors_origins


def test_dari_environment(monkeypatch):
    monkeypatch.setenv("FARAID_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("FARAID_DEFAULT_MADHAB", "maliki")
    monkeypatch.setenv("FARAID_LOG_LEVEL", "debug")
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.default_madhab == Madhab.MALIKI
    assert settings.log_level == "DEBUG"


def test_origins_json(monkeypatch):
    monkeypatch.setenv("FARAID_CORS_ORIGINS", '["http://c.test"]')
    assert Settings(_env_file=None).cors_origins == ["http://c.test"]
