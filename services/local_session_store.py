"""
Local Session Store - client-side staging for sessions not yet persisted.

Sessions are kept as JSON documents under `cooking-session-<id>` keys in
any mutable mapping: Streamlit's session_state in the console, a plain
dict in tests. Staged sessions use `temp-<milliseconds>` ids.
"""

import time
from typing import MutableMapping, Optional

from models.cooking import CookingSessionData

KEY_PREFIX = "cooking-session-"
TEMP_PREFIX = "temp-"


def is_temporary_id(session_id: str) -> bool:
    return session_id.startswith(TEMP_PREFIX)


class LocalSessionStore:
    """Ephemeral session documents keyed by session id."""

    def __init__(self, storage: Optional[MutableMapping] = None):
        self.storage = storage if storage is not None else {}

    def new_temp_id(self) -> str:
        millis = int(time.time() * 1000)
        while KEY_PREFIX + f"{TEMP_PREFIX}{millis}" in self.storage:
            millis += 1
        return f"{TEMP_PREFIX}{millis}"

    def stage(self, session: CookingSessionData) -> CookingSessionData:
        self.storage[KEY_PREFIX + session.id] = session.model_dump_json()
        return session

    def get(self, session_id: str) -> Optional[CookingSessionData]:
        raw = self.storage.get(KEY_PREFIX + session_id)
        if raw is None:
            return None
        return CookingSessionData.model_validate_json(raw)

    def remove(self, session_id: str) -> None:
        self.storage.pop(KEY_PREFIX + session_id, None)

    def list_for_user(self, user_id: str) -> list[CookingSessionData]:
        sessions = [
            CookingSessionData.model_validate_json(raw)
            for key, raw in list(self.storage.items())
            if str(key).startswith(KEY_PREFIX)
        ]
        return [s for s in sessions if s.user_id == user_id]
