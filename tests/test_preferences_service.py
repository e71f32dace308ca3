"""
Preferences service tests (timeouts and failures fall back to defaults).
"""

import time

import pytest
from sqlalchemy.exc import OperationalError

from models.repositories.user_preferences_repository import UserPreferencesRepository
from models.user_preferences import DEFAULT_VOICE_NAME, VoicePreferences
from services.preferences_service import PreferencesService


@pytest.fixture
def preferences(session_factory):
    return PreferencesService(session_factory, timeout=2.0)


def _slow(*args, **kwargs):
    time.sleep(0.5)


def _failing(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_update_then_load(preferences):
    saved = preferences.update_voice("user-1", VoicePreferences(), voice_name="zh-CN-YunxiNeural")

    assert saved.name == "zh-CN-YunxiNeural"
    assert preferences.load_voice("user-1") == saved


def test_load_timeout_returns_defaults(preferences, monkeypatch):
    monkeypatch.setattr(UserPreferencesRepository, "get", _slow)
    preferences.timeout = 0.05

    started = time.monotonic()
    prefs = preferences.load_voice("user-1")
    assert time.monotonic() - started < 0.4
    assert prefs == VoicePreferences()


def test_load_database_error_returns_defaults(preferences, monkeypatch):
    monkeypatch.setattr(UserPreferencesRepository, "get", _failing)
    assert preferences.load_voice("user-1").name == DEFAULT_VOICE_NAME


def test_update_timeout_applies_change_locally(preferences, monkeypatch):
    monkeypatch.setattr(UserPreferencesRepository, "update_voice", _slow)
    preferences.timeout = 0.05
    current = VoicePreferences(rate="-10%")

    prefs = preferences.update_voice("user-1", current, enabled=False)

    assert prefs.enabled is False
    assert prefs.rate == "-10%"
    assert current.enabled is True


def test_update_database_error_applies_change_locally(preferences, monkeypatch):
    monkeypatch.setattr(UserPreferencesRepository, "update_voice", _failing)

    prefs = preferences.update_voice("user-1", VoicePreferences(), voice_rate="+20%")

    assert prefs.rate == "+20%"
