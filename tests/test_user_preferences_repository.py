"""
User preferences repository tests.
"""

from models.repositories.user_preferences_repository import UserPreferencesRepository


def test_defaults_for_new_user(db):
    prefs = UserPreferencesRepository(db).get("new-user")
    assert prefs.voice.enabled is True


def test_update_voice_keeps_other_fields(db):
    repo = UserPreferencesRepository(db)
    repo.update_voice("user-1", voice_name="zh-CN-YunxiNeural")
    prefs = repo.update_voice("user-1", enabled=False)

    assert prefs.voice.name == "zh-CN-YunxiNeural"
    assert prefs.voice.enabled is False
    assert repo.get("user-1").voice.enabled is False


def test_save_is_upsert(db):
    repo = UserPreferencesRepository(db)
    prefs = repo.get("user-1")
    prefs.voice.rate = "-10%"
    repo.save("user-1", prefs)
    prefs.voice.rate = "+10%"
    repo.save("user-1", prefs)

    assert repo.get("user-1").voice.rate == "+10%"
    assert repo.get_record("user-1") is not None
