"""
SQLAlchemy ORM Entity Models

These models represent the database tables behind the cooking console.

Database Design Rationale:
- Scheduled dishes and their task lists are stored as JSON documents on the
  session row. A schedule is created once and never re-planned mid-session,
  so there is nothing to gain from normalizing it.
- Progress records are append-only rows keyed by session.
- User preferences are a JSON blob so new groups can be added without
  migrations.

Table Relationships:
    CookingSession (1) ──> (*) CookingProgress
    Recipe (standalone, source for the selection screen)
    UserPreference (one row per user)
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from config.database import Base


class Recipe(Base):
    """
    A cookable recipe offered on the selection screen.

    EquipmentNeeded is an ordered list of burner labels; the first entry is
    the preferred burner. ParallelTasks holds the recipe's sub-tasks in the
    CookingTask document shape.
    """
    __tablename__ = "Recipes"

    RecipeId = Column(Integer, primary_key=True, autoincrement=True)
    Name = Column(String(200), nullable=False)
    Description = Column(Text, nullable=True)
    PrepTime = Column(Integer, nullable=True)         # Minutes
    CookTime = Column(Integer, nullable=True)         # Minutes
    Calories = Column(Integer, nullable=True)
    Difficulty = Column(String(20), nullable=True)    # easy, medium, hard
    EquipmentNeeded = Column(JSON, nullable=True)     # ["left"], ["right"], []
    ParallelTasks = Column(JSON, nullable=True)
    CreatedDate = Column(DateTime, nullable=False, server_default=func.now())


class CookingSession(Base):
    """
    One end-to-end cooking run over both burners.

    Status is one of pending, cooking, completed. Pause is never stored
    here; it only stops the console's local clock.
    """
    __tablename__ = "CookingSessions"

    SessionId = Column(String(36), primary_key=True)
    UserId = Column(String(100), nullable=False, index=True)
    Name = Column(String(200), nullable=True)
    Recipes = Column(JSON, nullable=False, default=list)
    ScheduledDishes = Column(JSON, nullable=False, default=list)
    Status = Column(String(20), nullable=False, default="pending")
    CurrentStepIndex = Column(Integer, nullable=False, default=0)
    StartedAt = Column(DateTime, nullable=True)
    EstimatedEndTime = Column(DateTime, nullable=True)
    ActualEndTime = Column(DateTime, nullable=True)
    TotalDuration = Column(Integer, nullable=False, default=0)  # Minutes
    Notes = Column(Text, nullable=True)
    CreatedDate = Column(DateTime, nullable=False, server_default=func.now())
    UpdatedAt = Column(DateTime, nullable=False, server_default=func.now())

    progress = relationship(
        "CookingProgress",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="CookingProgress.ProgressId"
    )


class CookingProgress(Base):
    """
    Audit record of a step starting or completing.

    Rows are inserted, never updated.
    """
    __tablename__ = "CookingProgress"

    ProgressId = Column(Integer, primary_key=True, autoincrement=True)
    SessionId = Column(
        String(36),
        ForeignKey("CookingSessions.SessionId", ondelete="CASCADE"),
        nullable=False
    )
    StepIndex = Column(Integer, nullable=False)
    Equipment = Column(String(20), nullable=False, default="shared")
    Status = Column(String(20), nullable=False)   # pending, active, completed, skipped
    StartedAt = Column(DateTime, nullable=True)
    CompletedAt = Column(DateTime, nullable=True)
    DurationSeconds = Column(Integer, nullable=True)
    Temperature = Column(Integer, nullable=True)
    Notes = Column(Text, nullable=True)
    VoicePrompts = Column(JSON, nullable=True)
    CreatedDate = Column(DateTime, nullable=False, server_default=func.now())

    session = relationship("CookingSession", back_populates="progress")


class UserPreference(Base):
    """Per-user preferences stored as a JSON blob (see models.user_preferences)."""
    __tablename__ = "UserPreferences"

    UserId = Column(String(100), primary_key=True)
    Preferences = Column(Text, nullable=False, default="{}")
    UpdatedAt = Column(DateTime, nullable=False, server_default=func.now())
