"""
Cooking Session Repository - Data access for sessions and progress records.

Converts between CookingSession/CookingProgress rows and the Pydantic
domain models so nothing above this layer sees ORM objects.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from models.cooking import CookingProgressData, CookingSessionData
from models.entities import CookingProgress, CookingSession

# Domain field -> CookingSessions column
SESSION_COLUMNS = {
    "user_id": "UserId",
    "name": "Name",
    "recipes": "Recipes",
    "scheduled_dishes": "ScheduledDishes",
    "status": "Status",
    "current_step_index": "CurrentStepIndex",
    "started_at": "StartedAt",
    "estimated_end_time": "EstimatedEndTime",
    "actual_end_time": "ActualEndTime",
    "total_duration": "TotalDuration",
    "notes": "Notes",
}


class CookingSessionRepository:
    """Repository for cooking session database operations."""

    def __init__(self, db: Session):
        """Initialize with a database session."""
        self.db = db

    # ==========================================
    # Sessions
    # ==========================================

    def create(self, session: CookingSessionData) -> str:
        """Insert a new session and return its id."""
        data = session.model_dump(mode="json")
        record = CookingSession(
            SessionId=session.id,
            UserId=session.user_id,
            Name=session.name,
            Recipes=data["recipes"],
            ScheduledDishes=data["scheduled_dishes"],
            Status=session.status.value,
            CurrentStepIndex=session.current_step_index,
            StartedAt=session.started_at,
            EstimatedEndTime=session.estimated_end_time,
            ActualEndTime=session.actual_end_time,
            TotalDuration=session.total_duration,
            Notes=session.notes,
            CreatedDate=session.created_at,
            UpdatedAt=session.updated_at,
        )
        self.db.add(record)
        self.db.commit()
        return record.SessionId

    def get_record(self, session_id: str) -> Optional[CookingSession]:
        return self.db.query(CookingSession).filter(
            CookingSession.SessionId == session_id
        ).first()

    def get(self, session_id: str) -> Optional[CookingSessionData]:
        record = self.get_record(session_id)
        return self._to_data(record) if record else None

    def update(self, session_id: str, fields: dict[str, Any]) -> Optional[CookingSessionData]:
        """
        Apply a partial update (last write wins).

        Args:
            session_id: Session to update
            fields: Domain field names mapped to new values

        Returns:
            The updated session, or None if it doesn't exist
        """
        record = self.get_record(session_id)
        if not record:
            return None

        unknown = [f for f in fields if f not in SESSION_COLUMNS]
        if unknown:
            raise KeyError(f"Unknown session fields: {unknown}")

        # Validate through the domain model before touching the row
        current = self._to_data(record)
        merged = current.model_copy(update=fields)
        merged = CookingSessionData.model_validate(merged.model_dump())
        data = merged.model_dump(mode="json")

        for field in fields:
            column = SESSION_COLUMNS[field]
            if field in ("recipes", "scheduled_dishes", "status"):
                setattr(record, column, data[field])
            else:
                setattr(record, column, getattr(merged, field))
        record.UpdatedAt = datetime.now()

        self.db.commit()
        self.db.refresh(record)
        return self._to_data(record)

    def list_for_user(self, user_id: str) -> list[CookingSessionData]:
        """All sessions owned by a user, newest first."""
        records = self.db.query(CookingSession).filter(
            CookingSession.UserId == user_id
        ).order_by(CookingSession.CreatedDate.desc()).all()
        return [self._to_data(r) for r in records]

    # ==========================================
    # Progress log
    # ==========================================

    def add_progress(self, progress: CookingProgressData) -> CookingProgressData:
        record = CookingProgress(
            SessionId=progress.session_id,
            StepIndex=progress.step_index,
            Equipment=progress.equipment.value,
            Status=progress.status.value,
            StartedAt=progress.started_at,
            CompletedAt=progress.completed_at,
            DurationSeconds=progress.duration_seconds,
            Temperature=progress.temperature,
            Notes=progress.notes,
            VoicePrompts=list(progress.voice_prompts),
            CreatedDate=progress.created_at,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return progress.model_copy(update={"id": record.ProgressId})

    def list_progress(self, session_id: str) -> list[CookingProgressData]:
        records = self.db.query(CookingProgress).filter(
            CookingProgress.SessionId == session_id
        ).order_by(CookingProgress.ProgressId).all()
        return [
            CookingProgressData(
                id=r.ProgressId,
                session_id=r.SessionId,
                step_index=r.StepIndex,
                equipment=r.Equipment,
                status=r.Status,
                started_at=r.StartedAt,
                completed_at=r.CompletedAt,
                duration_seconds=r.DurationSeconds,
                temperature=r.Temperature,
                notes=r.Notes,
                voice_prompts=r.VoicePrompts or [],
                created_at=r.CreatedDate,
            )
            for r in records
        ]

    @staticmethod
    def _to_data(record: CookingSession) -> CookingSessionData:
        return CookingSessionData(
            id=record.SessionId,
            user_id=record.UserId,
            name=record.Name,
            recipes=record.Recipes or [],
            scheduled_dishes=record.ScheduledDishes or [],
            status=record.Status,
            current_step_index=record.CurrentStepIndex or 0,
            started_at=record.StartedAt,
            estimated_end_time=record.EstimatedEndTime,
            actual_end_time=record.ActualEndTime,
            total_duration=record.TotalDuration or 0,
            notes=record.Notes,
            created_at=record.CreatedDate,
            updated_at=record.UpdatedAt,
        )
