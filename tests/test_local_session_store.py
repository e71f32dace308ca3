"""
Local staging store tests.
"""

from models.cooking import CookingSessionData
from services.local_session_store import KEY_PREFIX, LocalSessionStore, is_temporary_id


def _session(session_id, user_id="user-1"):
    return CookingSessionData(id=session_id, user_id=user_id)


def test_stage_and_get(local_store):
    session = _session("temp-100")
    local_store.stage(session)

    assert local_store.get("temp-100") == session
    assert KEY_PREFIX + "temp-100" in local_store.storage


def test_get_missing(local_store):
    assert local_store.get("temp-404") is None


def test_remove(local_store):
    local_store.stage(_session("temp-100"))
    local_store.remove("temp-100")
    local_store.remove("temp-100")
    assert local_store.get("temp-100") is None


def test_temp_ids_do_not_collide(local_store):
    first = local_store.new_temp_id()
    local_store.stage(_session(first))
    second = local_store.new_temp_id()

    assert first != second
    assert is_temporary_id(first) and is_temporary_id(second)


def test_list_for_user_ignores_other_keys():
    storage = {"audio_key": 3}
    store = LocalSessionStore(storage)
    store.stage(_session("temp-1"))
    store.stage(_session("temp-2", user_id="user-2"))

    assert [s.id for s in store.list_for_user("user-1")] == ["temp-1"]
    assert storage["audio_key"] == 3


def test_is_temporary_id():
    assert is_temporary_id("temp-1700000000000")
    assert not is_temporary_id("8f14e45f-ceea-467f-a0c8-6b5d1f1c3e2a")
