"""
Services layer - pure business logic, no Streamlit dependencies.
"""

from services.exceptions import CookingConsoleError, SessionStoreError, SessionNotFoundError
from services.scheduler_service import schedule_dual_burner, calculate_total_duration
from services.session_clock import SessionClock, project_burner_state
from services.voice_command_service import VoiceCommandService
from services.local_session_store import LocalSessionStore
from services.session_service import CookingSessionService
from services.recipe_service import RecipeService
from services.preferences_service import PreferencesService
from services.audio_service import AudioService

__all__ = [
    "CookingConsoleError",
    "SessionStoreError",
    "SessionNotFoundError",
    "schedule_dual_burner",
    "calculate_total_duration",
    "SessionClock",
    "project_burner_state",
    "VoiceCommandService",
    "LocalSessionStore",
    "CookingSessionService",
    "RecipeService",
    "PreferencesService",
    "AudioService",
]
