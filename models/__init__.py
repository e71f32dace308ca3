"""
Models Package - database entities and domain models.
"""

from models.entities import (
    Recipe,
    CookingSession,
    CookingProgress,
    UserPreference,
)
from models.cooking import (
    DEFAULT_COOKING_TIME,
    DEFAULT_PREP_TIME,
    Equipment,
    TaskStatus,
    DishStatus,
    SessionStatus,
    ProgressStatus,
    CookingTask,
    RecipeInput,
    ScheduledDish,
    CookingSessionData,
    CookingProgressData,
    BurnerState,
    DualBurnerState,
)
from models.voice_commands import CommandType, QueryTarget, VoiceCommand

__all__ = [
    # Entities
    "Recipe",
    "CookingSession",
    "CookingProgress",
    "UserPreference",
    # Domain models
    "DEFAULT_COOKING_TIME",
    "DEFAULT_PREP_TIME",
    "Equipment",
    "TaskStatus",
    "DishStatus",
    "SessionStatus",
    "ProgressStatus",
    "CookingTask",
    "RecipeInput",
    "ScheduledDish",
    "CookingSessionData",
    "CookingProgressData",
    "BurnerState",
    "DualBurnerState",
    # Voice
    "CommandType",
    "QueryTarget",
    "VoiceCommand",
]
