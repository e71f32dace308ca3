"""
Session clock and live burner projection.

The clock counts simulated minutes while a session is cooking. Each tick is
a one-shot timer that re-arms itself, so stopping the clock only has to
cancel the pending timer. The projector is a pure function from the
schedule and elapsed minutes to a DualBurnerState.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from models.cooking import (
    BurnerState,
    DualBurnerState,
    Equipment,
    ScheduledDish,
)

logger = logging.getLogger(__name__)

TimerFactory = Callable[..., threading.Timer]


def project_burner_state(dishes: Iterable[ScheduledDish], elapsed: int) -> DualBurnerState:
    """
    Work out what each burner is doing `elapsed` minutes into the session.

    At most one dish per burner covers any minute, since the scheduler never
    overlaps dishes on the same burner. The dish's first task is surfaced as
    the current task.
    """
    occupying: dict[Equipment, ScheduledDish] = {}
    for dish in dishes:
        if dish.equipment not in occupying and dish.occupies(elapsed):
            occupying[dish.equipment] = dish

    state = DualBurnerState()
    for equipment, dish in occupying.items():
        task = dish.tasks[0] if dish.tasks else None
        burner = BurnerState(
            active=True,
            recipe_name=dish.recipe_name,
            current_task=task,
            remaining_time=dish.end_time - elapsed,
            temperature=task.temperature if task else None,
        )
        if equipment == Equipment.LEFT:
            state.left = burner
        else:
            state.right = burner
    return state


def remaining_minutes(total_duration: int, elapsed: int) -> int:
    return max(0, total_duration - elapsed)


def progress_percent(total_duration: int, elapsed: int) -> float:
    if total_duration <= 0:
        return 0.0
    return min(100.0, elapsed / total_duration * 100)


class SessionClock:
    """
    Cancelable minute clock.

    Args:
        on_tick: Called with the new elapsed minute count after each tick
        interval_seconds: Real seconds per simulated minute
        timer_factory: Builds the one-shot timer (threading.Timer signature)
        elapsed: Starting minute count
    """

    def __init__(
        self,
        on_tick: Callable[[int], None],
        interval_seconds: float = 60.0,
        timer_factory: TimerFactory = threading.Timer,
        elapsed: int = 0,
    ):
        self.on_tick = on_tick
        self.interval_seconds = interval_seconds
        self.timer_factory = timer_factory
        self._elapsed = elapsed
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        """Start ticking; no-op if already running."""
        with self._lock:
            if self._timer is not None:
                return
            self._arm()
        logger.debug(f"Clock started at minute {self._elapsed}")

    def stop(self) -> None:
        """Cancel the pending tick. Safe to call when stopped."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def tick(self) -> bool:
        """
        Advance one minute now.

        Returns:
            False when the clock is stopped (paused clocks don't advance)
        """
        return self._advance()

    def _advance(self, generation: Optional[int] = None) -> bool:
        with self._lock:
            if self._timer is None:
                return False
            # A stale timer that fired after stop()/restart
            if generation is not None and generation != self._generation:
                return False
            self._elapsed += 1
            elapsed = self._elapsed
        # Called outside the lock so on_tick may stop the clock
        self.on_tick(elapsed)
        return True

    def _arm(self) -> None:
        generation = self._generation
        timer = self.timer_factory(self.interval_seconds, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        try:
            if not self._advance(generation):
                return
        except Exception as e:
            logger.error(f"Clock tick failed: {e}")
        with self._lock:
            if generation == self._generation and self._timer is not None:
                self._arm()
