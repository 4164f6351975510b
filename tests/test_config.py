import logging

from equity_client import config


def test_backend_url_strips_trailing_slash(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", " http://analysis:8000/ ")
    assert config.backend_url() == "http://analysis:8000"


def test_export_dir_default(monkeypatch):
    monkeypatch.delenv("EXPORT_DIR", raising=False)
    assert config.export_dir() == "reports"


def test_configure_logging_without_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    config.configure_logging(None)
    assert calls[0]["level"] == logging.DEBUG
