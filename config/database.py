"""
Database setup - SQLAlchemy engine, session factory and declarative base.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import get_settings

settings = get_settings()

# SQLite connections are shared with the clock's timer thread
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db() -> None:
    """Create all tables that don't exist yet."""
    # Import entities so they register on Base.metadata
    import models.entities  # noqa: F401

    Base.metadata.create_all(bind=engine)
