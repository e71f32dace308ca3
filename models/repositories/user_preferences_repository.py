"""
User Preferences Repository - Data access for user preferences.

Reads and writes the Preferences JSON blob through the typed
UserPreferencesData model.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from models.entities import UserPreference
from models.user_preferences import UserPreferencesData


class UserPreferencesRepository:
    """Repository for user preferences database operations."""

    def __init__(self, db: Session):
        """Initialize with a database session."""
        self.db = db

    def get(self, user_id: str) -> UserPreferencesData:
        """Get user preferences, returning defaults if not found."""
        record = self.get_record(user_id)
        if record:
            return UserPreferencesData.from_json(record.Preferences)
        return UserPreferencesData()

    def get_record(self, user_id: str) -> Optional[UserPreference]:
        return self.db.query(UserPreference).filter(
            UserPreference.UserId == user_id
        ).first()

    def save(self, user_id: str, preferences: UserPreferencesData) -> UserPreference:
        """Save user preferences (upsert)."""
        record = self.get_record(user_id)

        if record:
            record.Preferences = preferences.to_json()
            record.UpdatedAt = datetime.now()
        else:
            record = UserPreference(
                UserId=user_id,
                Preferences=preferences.to_json(),
                UpdatedAt=datetime.now()
            )
            self.db.add(record)

        self.db.commit()
        self.db.refresh(record)
        return record

    def update_voice(
        self,
        user_id: str,
        voice_name: Optional[str] = None,
        voice_rate: Optional[str] = None,
        enabled: Optional[bool] = None
    ) -> UserPreferencesData:
        """
        Update voice preferences; arguments left as None keep their value.

        Returns:
            Updated UserPreferencesData
        """
        prefs = self.get(user_id)
        if voice_name is not None:
            prefs.voice.name = voice_name
        if voice_rate is not None:
            prefs.voice.rate = voice_rate
        if enabled is not None:
            prefs.voice.enabled = enabled
        self.save(user_id, prefs)
        return prefs
