"""
Cooking Controller - drives one cooking session through its lifecycle.

This controller handles:
- The pending -> cooking -> completed transitions (persisted)
- Pause/resume of the session clock (not persisted)
- Step navigation and spoken prompts
- Live burner state on every clock tick
- Voice transcripts, dispatched to the same methods the buttons use

The session is passed in explicitly; the controller holds no global state.
Clock ticks arrive on a timer thread, so every public method takes the
controller lock.

Transition methods return (success, error_message):
- (True, None): the transition happened
- (False, None): not applicable in the current state, nothing changed
- (False, message): the store rejected the write; in-memory state is
  unchanged and the same call can be retried
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional, Union

from config.settings import get_settings
from models.cooking import (
    CookingProgressData,
    CookingSessionData,
    CookingTask,
    DishStatus,
    DualBurnerState,
    Equipment,
    ProgressStatus,
    ScheduledDish,
    SessionStatus,
)
from models.voice_commands import CommandType, QueryTarget, VoiceCommand
from services.exceptions import SessionStoreError
from services.session_clock import (
    SessionClock,
    progress_percent,
    project_burner_state,
    remaining_minutes,
)
from services.session_service import CookingSessionService
from services.speech import NullSpeech, SpeechOutput
from services.timeouts import call_with_timeout
from services.voice_command_service import VoiceCommandService
from services import voice_prompts

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save the cooking session. Please try again."


class CookingController:
    """Controller for a single cooking session."""

    def __init__(
        self,
        session: CookingSessionData,
        store: CookingSessionService,
        speech: Optional[SpeechOutput] = None,
        voice_enabled: bool = True,
        tick_seconds: Optional[float] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.store = store
        self.speech = speech or NullSpeech()
        self.voice_enabled = voice_enabled
        self.commands = VoiceCommandService()
        self._now = now
        self._lock = threading.RLock()
        self._paused = session.status == SessionStatus.PAUSED
        self._prompts: list[str] = []
        self._step_started_at: Optional[datetime] = None

        self.clock = SessionClock(
            on_tick=self._on_tick,
            interval_seconds=get_settings().tick_seconds if tick_seconds is None else tick_seconds,
            timer_factory=timer_factory,
            elapsed=self._recover_elapsed(),
        )
        self._burner_state = project_burner_state(session.scheduled_dishes, self.clock.elapsed)

        # A session reloaded mid-cook picks its clock back up
        if session.status == SessionStatus.COOKING:
            self._step_started_at = self._now()
            self.clock.start()

    def _recover_elapsed(self) -> int:
        """Minutes since started_at; paused time is not subtracted."""
        if self.session.status == SessionStatus.COMPLETED:
            return self.session.total_duration
        if not self._is_cooking or self.session.started_at is None:
            return 0
        seconds = (self._now() - self.session.started_at).total_seconds()
        return max(0, int(seconds // 60))

    # ==========================================
    # State accessors
    # ==========================================

    @property
    def _is_cooking(self) -> bool:
        return self.session.status in (SessionStatus.COOKING, SessionStatus.PAUSED)

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def elapsed(self) -> int:
        return self.clock.elapsed

    @property
    def burner_state(self) -> DualBurnerState:
        return self._burner_state

    @property
    def remaining_minutes(self) -> int:
        return remaining_minutes(self.session.total_duration, self.clock.elapsed)

    @property
    def progress_percent(self) -> float:
        return progress_percent(self.session.total_duration, self.clock.elapsed)

    @property
    def current_dish(self) -> Optional[ScheduledDish]:
        """First dish that is still pending or cooking."""
        return next(
            (d for d in self.session.scheduled_dishes
             if d.status in (DishStatus.PENDING, DishStatus.COOKING)),
            None
        )

    @property
    def current_task(self) -> Optional[CookingTask]:
        dish = self.current_dish
        index = self.session.current_step_index
        if dish and 0 <= index < len(dish.tasks):
            return dish.tasks[index]
        return None

    def set_voice_enabled(self, enabled: bool) -> None:
        with self._lock:
            self.voice_enabled = enabled
            if not enabled:
                self.speech.stop()

    # ==========================================
    # Lifecycle
    # ==========================================

    def start(self) -> tuple[bool, Optional[str]]:
        """pending -> cooking. No-op once cooking or completed."""
        with self._lock:
            if self._is_cooking:
                logger.info(f"Session {self.session.id} is already cooking")
                return False, None
            if self.session.status == SessionStatus.COMPLETED:
                logger.info(f"Session {self.session.id} is completed, ignoring start")
                return False, None

            now = self._now()
            ok, error = self._persist({
                "status": SessionStatus.COOKING,
                "started_at": now,
                "estimated_end_time": now + timedelta(minutes=self.session.total_duration),
            })
            if not ok:
                return ok, error

            logger.info(f"Session {self.session.id} started cooking")
            self._paused = False
            self.clock.start()
            self._refresh_live_state()
            self._speak(voice_prompts.START_PROMPT)
            self._begin_step()
            return True, None

    def pause(self) -> tuple[bool, Optional[str]]:
        """Stop the clock; the stored status stays cooking."""
        with self._lock:
            if not self._is_cooking or self._paused:
                return False, None
            self.clock.stop()
            self._paused = True
            logger.info(f"Session {self.session.id} paused at minute {self.clock.elapsed}")
            self._speak(voice_prompts.PAUSE_PROMPT)
            return True, None

    def resume(self) -> tuple[bool, Optional[str]]:
        with self._lock:
            if not self._is_cooking or not self._paused:
                return False, None
            self._paused = False
            self.clock.start()
            logger.info(f"Session {self.session.id} resumed at minute {self.clock.elapsed}")
            self._speak(voice_prompts.RESUME_PROMPT)
            return True, None

    def complete(self) -> tuple[bool, Optional[str]]:
        """cooking -> completed. No-op unless cooking."""
        with self._lock:
            if not self._is_cooking:
                logger.info(f"Session {self.session.id} is {self.session.status.value}, ignoring complete")
                return False, None

            finished_index = self.session.current_step_index
            finished_dish = self.current_dish
            finished_task = self.current_task

            now = self._now()
            dishes = [
                d.model_copy(update={"status": DishStatus.COMPLETED})
                for d in self.session.scheduled_dishes
            ]
            ok, error = self._persist({
                "status": SessionStatus.COMPLETED,
                "actual_end_time": now,
                "scheduled_dishes": dishes,
            })
            if not ok:
                return ok, error

            logger.info(f"Session {self.session.id} completed after {self.clock.elapsed} min")
            self.clock.stop()
            self._paused = False
            self._burner_state = DualBurnerState()
            self._speak(voice_prompts.COMPLETE_PROMPT)
            self._finish_step(finished_index, finished_dish, finished_task)
            return True, None

    def close(self) -> None:
        """Cancel the pending tick and any speech (leaving the console)."""
        with self._lock:
            self.clock.stop()
            self.speech.stop()

    # ==========================================
    # Steps and queries
    # ==========================================

    def next_step(self) -> tuple[bool, Optional[str]]:
        """Advance the step cursor and speak the new step."""
        with self._lock:
            if self.session.status == SessionStatus.COMPLETED:
                return False, None

            previous_index = self.session.current_step_index
            previous_dish = self.current_dish
            previous_task = self.current_task

            ok, error = self._persist({"current_step_index": previous_index + 1})
            if not ok:
                return ok, error

            if self._is_cooking:
                self._finish_step(previous_index, previous_dish, previous_task)
            self._speak_current_step()
            if self._is_cooking:
                self._begin_step()
            return True, None

    def repeat(self) -> str:
        """Speak the current step again without advancing."""
        with self._lock:
            return self._speak_current_step()

    def query(self, target: Union[QueryTarget, str]) -> str:
        """Speak and return the answer to a time or temperature question."""
        with self._lock:
            if QueryTarget(target) == QueryTarget.TIME:
                text = voice_prompts.remaining_time_prompt(self.remaining_minutes)
            else:
                text = voice_prompts.temperature_prompt(self.current_task)
            self._speak(text)
            return text

    # ==========================================
    # Voice input
    # ==========================================

    def handle_transcript(self, transcript: str) -> Optional[VoiceCommand]:
        """Interpret a transcript and run it; unrecognized speech is ignored."""
        command = self.commands.parse(transcript)
        if command is None:
            return None
        self.handle_command(command)
        return command

    def handle_command(self, command: VoiceCommand) -> None:
        with self._lock:
            logger.info(f"Voice command {command.type.value} for session {self.session.id}")
            if command.type == CommandType.START:
                # "继续" (continue) while paused means resume
                if self._is_cooking and self._paused:
                    self.resume()
                else:
                    self.start()
            elif command.type == CommandType.PAUSE:
                self.pause()
            elif command.type == CommandType.NEXT:
                self.next_step()
            elif command.type == CommandType.REPEAT:
                self.repeat()
            elif command.type == CommandType.QUERY:
                self.query(command.target or QueryTarget.TIME)

    # ==========================================
    # Clock
    # ==========================================

    def tick(self) -> bool:
        """Advance the clock one minute now (no-op while paused or stopped)."""
        return self.clock.tick()

    def _on_tick(self, elapsed: int) -> None:
        with self._lock:
            if not self._is_cooking or self._paused:
                return
            self._refresh_live_state()

    def _refresh_live_state(self) -> None:
        elapsed = self.clock.elapsed
        dishes = self.session.scheduled_dishes
        self._burner_state = project_burner_state(dishes, elapsed)

        updated = []
        changed = False
        for dish in dishes:
            if dish.status == DishStatus.COMPLETED or elapsed >= dish.end_time:
                status = DishStatus.COMPLETED
            elif dish.occupies(elapsed):
                status = DishStatus.COOKING
            else:
                status = dish.status
            if status != dish.status:
                changed = True
                dish = dish.model_copy(update={"status": status})
            updated.append(dish)

        if changed:
            # A failed write is retried by the next tick
            self._persist({"scheduled_dishes": updated}, timeout=self.store.timeout)

    # ==========================================
    # Helpers
    # ==========================================

    def _persist(self, fields: dict, timeout: Optional[float] = None) -> tuple[bool, Optional[str]]:
        """Write fields to the store; `timeout` bounds the write when given."""
        session_id = self.session.id
        try:
            if timeout is None:
                self.session = self.store.update(session_id, fields)
            else:
                self.session = call_with_timeout(
                    lambda: self.store.update(session_id, fields),
                    timeout,
                    f"Saving session {session_id}"
                )
        except (SessionStoreError, TimeoutError) as e:
            logger.error(f"Could not save session {session_id}: {e}")
            return False, SAVE_FAILED_MESSAGE
        return True, None

    def _speak(self, text: str) -> None:
        """Best-effort speech; never raises."""
        if not self.voice_enabled or not self.speech.supported:
            return
        self._prompts.append(text)
        try:
            self.speech.speak(text)
        except Exception as e:
            logger.warning(f"Speech failed: {e}")

    def _speak_current_step(self) -> str:
        task = self.current_task
        text = voice_prompts.step_prompt(task) if task else voice_prompts.NO_MORE_STEPS_PROMPT
        self._speak(text)
        return text

    def _begin_step(self) -> None:
        self._step_started_at = self._now()
        dish = self.current_dish
        task = self.current_task
        self._record_progress(CookingProgressData(
            session_id=self.session.id,
            step_index=self.session.current_step_index,
            equipment=dish.equipment if dish else Equipment.SHARED,
            status=ProgressStatus.ACTIVE,
            started_at=self._step_started_at,
            temperature=task.temperature if task else None,
            notes=voice_prompts.generate_step_prompt(task, "start") if task else None,
            voice_prompts=list(self._prompts),
        ))
        self._prompts = []

    def _finish_step(
        self,
        step_index: int,
        dish: Optional[ScheduledDish],
        task: Optional[CookingTask],
    ) -> None:
        now = self._now()
        started_at = self._step_started_at
        self._record_progress(CookingProgressData(
            session_id=self.session.id,
            step_index=step_index,
            equipment=dish.equipment if dish else Equipment.SHARED,
            status=ProgressStatus.COMPLETED,
            started_at=started_at,
            completed_at=now,
            duration_seconds=int((now - started_at).total_seconds()) if started_at else None,
            temperature=task.temperature if task else None,
            notes=voice_prompts.generate_step_prompt(task, "complete") if task else None,
            voice_prompts=list(self._prompts),
        ))
        self._prompts = []
        self._step_started_at = None

    def _record_progress(self, progress: CookingProgressData) -> None:
        try:
            self.store.record_progress(progress)
        except SessionStoreError as e:
            logger.warning(f"Could not record progress for session {self.session.id}: {e}")
