"""Tests for the engine factory."""
from app.core.config import settings
from app.database import database


def capture_engine_kwargs(monkeypatch):
    calls = []
    monkeypatch.setattr(database, "create_engine", lambda url, **kwargs: calls.append((url, kwargs)))
    return calls


def test_sqlite_engine_skips_pool_settings(monkeypatch):
    calls = capture_engine_kwargs(monkeypatch)
    database.get_engine("sqlite:///./donations.db")

    url, kwargs = calls[0]
    assert url == "sqlite:///./donations.db"
    assert kwargs["connect_args"] == {"check_same_thread": False}
    assert "pool_size" not in kwargs


def test_server_engine_uses_pool_settings(monkeypatch):
    calls = capture_engine_kwargs(monkeypatch)
    database.get_engine("postgresql://user:pass@db/donations")

    _, kwargs = calls[0]
    assert "connect_args" not in kwargs
    assert kwargs["pool_size"] == settings.DB_POOL_SIZE
    assert kwargs["max_overflow"] == settings.DB_MAX_OVERFLOW
