"""
Config Package - Application configuration and database setup.
"""

from config.settings import Settings, get_settings, configure_logging
from config.database import SessionLocal, Base, engine, init_db
from config.auth import (
    UserContext,
    get_current_user,
    get_user_id,
    get_user_display_name,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "configure_logging",
    # Database
    "SessionLocal",
    "Base",
    "engine",
    "init_db",
    # Authentication
    "UserContext",
    "get_current_user",
    "get_user_id",
    "get_user_display_name",
]
