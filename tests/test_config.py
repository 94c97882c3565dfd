"""
Tests for settings.
"""
import pytest
from pydantic import ValidationError
from ulidkit.config import Settings
from ulidkit.monotonic import MonotonicGenerator


def test_defaults(monkeypatch):
    monkeypatch.delenv("ULIDKIT_MONOTONIC_LOCK_MODE", raising=False)
    monkeypatch.delenv("ULIDKIT_MONOTONIC_LOCK_TIMEOUT_MS", raising=False)
    s = Settings(_env_file=None)
    assert s.MONOTONIC_LOCK_MODE == "strict"
    assert s.MONOTONIC_LOCK_TIMEOUT_MS == 1.0
    assert s.LOG_JSON is False


def test_env_override(monkeypatch):
    monkeypatch.setenv("ULIDKIT_MONOTONIC_LOCK_MODE", "timed")
    monkeypatch.setenv("ULIDKIT_MONOTONIC_LOCK_TIMEOUT_MS", "2.5")
    monkeypatch.setenv("ULIDKIT_LOG_JSON", "true")
    s = Settings(_env_file=None)
    assert s.MONOTONIC_LOCK_MODE == "timed"
    assert s.MONOTONIC_LOCK_TIMEOUT_MS == 2.5
    assert s.LOG_JSON is True


def test_invalid_lock_mode(monkeypatch):
    monkeypatch.setenv("ULIDKIT_MONOTONIC_LOCK_MODE", "spin")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_generator_reads_settings(monkeypatch):
    from ulidkit import monotonic
    monkeypatch.setattr(monotonic.settings, "MONOTONIC_LOCK_MODE", "timed")
    monkeypatch.setattr(monotonic.settings, "MONOTONIC_LOCK_TIMEOUT_MS", 3.0)
    g = MonotonicGenerator(80)
    assert g.lock_mode == "timed"
    assert g.lock_timeout_ms == 3.0
