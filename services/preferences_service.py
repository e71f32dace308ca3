"""
Preferences Service - the user's voice settings for the console.

Reads and writes go through UserPreferencesRepository with the store
timeout. A slow or failing database never blocks the console: reads fall
back to the default voice and writes apply for the current visit only.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.database import SessionLocal
from config.settings import get_settings
from models.repositories.user_preferences_repository import UserPreferencesRepository
from models.user_preferences import VoicePreferences
from services.timeouts import call_with_timeout

logger = logging.getLogger(__name__)


class PreferencesService:
    """Timeout-bounded access to voice preferences."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        timeout: Optional[float] = None,
    ):
        self.session_factory = session_factory
        self.timeout = get_settings().store_timeout_seconds if timeout is None else timeout

    def load_voice(self, user_id: str) -> VoicePreferences:
        """The user's voice settings, or the defaults when unavailable."""
        try:
            return call_with_timeout(
                lambda: self._with_repository(lambda repo: repo.get(user_id).voice),
                self.timeout,
                f"Loading preferences for {user_id}"
            )
        except (SQLAlchemyError, TimeoutError) as e:
            logger.warning(f"Voice preferences unavailable, using defaults: {e}")
            return VoicePreferences()

    def update_voice(
        self,
        user_id: str,
        current: VoicePreferences,
        voice_name: Optional[str] = None,
        voice_rate: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> VoicePreferences:
        """
        Change voice settings; arguments left as None keep their value.

        Returns:
            The stored settings, or `current` with the changes applied when
            they could not be saved
        """
        try:
            return call_with_timeout(
                lambda: self._with_repository(lambda repo: repo.update_voice(
                    user_id,
                    voice_name=voice_name,
                    voice_rate=voice_rate,
                    enabled=enabled,
                ).voice),
                self.timeout,
                f"Saving preferences for {user_id}"
            )
        except (SQLAlchemyError, TimeoutError) as e:
            logger.warning(f"Could not save voice preferences: {e}")
            changes = {"name": voice_name, "rate": voice_rate, "enabled": enabled}
            return current.model_copy(update={k: v for k, v in changes.items() if v is not None})

    def _with_repository(self, action):
        db = self.session_factory()
        try:
            return action(UserPreferencesRepository(db))
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()
