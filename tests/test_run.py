"""Tests for the uvicorn launcher."""
import run
from app.core.config import settings


def capture_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


def test_debug_launch_reloads_single_process(monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", True)
    calls = capture_uvicorn(monkeypatch)
    run.main()

    app, kwargs = calls[0]
    assert app == "app.main:app"
    assert kwargs["reload"] is True
    assert kwargs["workers"] is None
    assert kwargs["host"] == settings.HOST
    assert kwargs["port"] == settings.PORT


def test_production_launch_uses_workers(monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", False)
    calls = capture_uvicorn(monkeypatch)
    run.main()

    _, kwargs = calls[0]
    assert kwargs["reload"] is False
    assert kwargs["workers"] == settings.WORKERS
    assert kwargs["log_level"] == settings.LOG_LEVEL.lower()
