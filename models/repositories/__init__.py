"""
Repositories - Data access layer for database operations.
"""

from models.repositories.cooking_session_repository import CookingSessionRepository
from models.repositories.user_preferences_repository import UserPreferencesRepository

__all__ = ["CookingSessionRepository", "UserPreferencesRepository"]
