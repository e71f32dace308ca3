"""
Cooking Session Service - the session store used by the console.

Creates sessions from a recipe selection, and reads/updates them through
CookingSessionRepository. A new session is first staged in the local store
under a temp id and then written to the database; if the write fails the
staged copy is still usable. Calls on temp ids are served locally.

Database errors are raised as SessionStoreError so callers can retry.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.database import SessionLocal
from config.settings import get_settings
from models.cooking import CookingProgressData, CookingSessionData
from models.repositories.cooking_session_repository import CookingSessionRepository
from services.exceptions import SessionNotFoundError, SessionStoreError
from services.local_session_store import LocalSessionStore, is_temporary_id
from services.scheduler_service import (
    RecipeLike,
    calculate_total_duration,
    schedule_dual_burner,
    to_recipe_input,
)
from services.timeouts import call_with_timeout

logger = logging.getLogger(__name__)


class CookingSessionService:
    """Session store: create / get / update plus progress logging."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        local_store: Optional[LocalSessionStore] = None,
        timeout: Optional[float] = None,
    ):
        self.session_factory = session_factory
        self.local = local_store or LocalSessionStore()
        self.timeout = get_settings().store_timeout_seconds if timeout is None else timeout
        self._local_progress: dict[str, list[CookingProgressData]] = {}

    def _with_repository(self, action: Callable[[CookingSessionRepository], Any]) -> Any:
        db = self.session_factory()
        try:
            return action(CookingSessionRepository(db))
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Session store error: {e}")
            raise SessionStoreError(str(e)) from e
        finally:
            db.close()

    # ==========================================
    # Session creation
    # ==========================================

    def create_session(
        self,
        user_id: str,
        recipes: Iterable[RecipeLike],
        name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CookingSessionData:
        """
        Schedule the selected recipes and create a pending session.

        Raises:
            ValueError: No recipes were selected
        """
        inputs = [to_recipe_input(r) for r in recipes]
        if not inputs:
            raise ValueError("Select at least one recipe to start a cooking session")

        dishes = schedule_dual_burner(inputs)
        now = datetime.now()
        staged = CookingSessionData(
            id=self.local.new_temp_id(),
            user_id=user_id,
            name=name or f"烹饪会话 {now:%Y-%m-%d %H:%M}",
            recipes=[r.id for r in inputs],
            scheduled_dishes=dishes,
            total_duration=calculate_total_duration(dishes),
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        self.local.stage(staged)

        durable = staged.model_copy(update={"id": str(uuid.uuid4())})
        try:
            self.create(durable)
        except SessionStoreError as e:
            logger.warning(f"Keeping session {staged.id} staged locally: {e}")
            return staged

        self.local.remove(staged.id)
        logger.info(
            f"Created session {durable.id} with {len(dishes)} dishes, "
            f"{durable.total_duration} min total"
        )
        return durable

    # ==========================================
    # Store contract
    # ==========================================

    def create(self, session: CookingSessionData) -> str:
        if is_temporary_id(session.id):
            self.local.stage(session)
            return session.id
        return self._with_repository(lambda repo: repo.create(session))

    def get(self, session_id: str) -> Optional[CookingSessionData]:
        if is_temporary_id(session_id):
            return self.local.get(session_id)
        return self._with_repository(lambda repo: repo.get(session_id))

    def load(self, session_id: str) -> Optional[CookingSessionData]:
        """
        get() bounded by the store timeout.

        Returns:
            The session, or None when it is missing or the store is
            unavailable
        """
        try:
            return call_with_timeout(
                lambda: self.get(session_id),
                self.timeout,
                f"Loading session {session_id}"
            )
        except (SessionStoreError, TimeoutError) as e:
            logger.warning(f"Session {session_id} unavailable: {e}")
            return None

    def update(self, session_id: str, fields: dict[str, Any]) -> CookingSessionData:
        """
        Apply a partial update and return the stored session.

        Raises:
            SessionNotFoundError: No such session
            SessionStoreError: The write failed
        """
        if is_temporary_id(session_id):
            current = self.local.get(session_id)
            if current is None:
                raise SessionNotFoundError(session_id)
            merged = current.model_copy(update={**fields, "updated_at": datetime.now()})
            updated = CookingSessionData.model_validate(merged.model_dump())
            return self.local.stage(updated)

        updated = self._with_repository(lambda repo: repo.update(session_id, fields))
        if updated is None:
            raise SessionNotFoundError(session_id)
        return updated

    def list_for_user(self, user_id: str) -> list[CookingSessionData]:
        """Durable and staged sessions for a user, newest first."""
        sessions = self._with_repository(lambda repo: repo.list_for_user(user_id))
        sessions.extend(self.local.list_for_user(user_id))
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    def recent_sessions(self, user_id: str) -> list[CookingSessionData]:
        """
        list_for_user() bounded by the store timeout.

        Returns:
            All sessions, or only the locally staged ones when the store is
            slow or failing
        """
        try:
            return call_with_timeout(
                lambda: self.list_for_user(user_id),
                self.timeout,
                f"Listing sessions for {user_id}"
            )
        except (SessionStoreError, TimeoutError) as e:
            logger.warning(f"Session history unavailable, showing local sessions: {e}")
            return sorted(
                self.local.list_for_user(user_id),
                key=lambda s: s.created_at,
                reverse=True
            )

    # ==========================================
    # Progress log
    # ==========================================

    def record_progress(self, progress: CookingProgressData) -> CookingProgressData:
        if is_temporary_id(progress.session_id):
            self._local_progress.setdefault(progress.session_id, []).append(progress)
            return progress
        return self._with_repository(lambda repo: repo.add_progress(progress))

    def list_progress(self, session_id: str) -> list[CookingProgressData]:
        if is_temporary_id(session_id):
            return list(self._local_progress.get(session_id, []))
        return self._with_repository(lambda repo: repo.list_progress(session_id))
