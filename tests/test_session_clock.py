"""
Session clock and burner projection tests.
"""

import threading

import pytest

from models.cooking import Equipment
from services.scheduler_service import schedule_dual_burner
from services.session_clock import (
    SessionClock,
    progress_percent,
    project_burner_state,
    remaining_minutes,
)


@pytest.fixture
def ticks():
    return []


@pytest.fixture
def session_clock(timers, ticks):
    return SessionClock(on_tick=ticks.append, interval_seconds=60, timer_factory=timers)


class TestSessionClock:

    def test_start_arms_one_daemon_timer(self, session_clock, timers):
        session_clock.start()

        assert session_clock.running
        assert len(timers.pending) == 1
        assert timers.pending[0].interval == 60
        assert timers.pending[0].daemon is True

    def test_start_twice_keeps_one_timer(self, session_clock, timers):
        session_clock.start()
        session_clock.start()
        assert len(timers.pending) == 1

    def test_each_interval_advances_one_minute(self, session_clock, timers, ticks):
        session_clock.start()
        timers.fire(3)

        assert session_clock.elapsed == 3
        assert ticks == [1, 2, 3]
        assert len(timers.pending) == 1

    def test_stop_cancels_pending_tick(self, session_clock, timers, ticks):
        session_clock.start()
        timer = timers.pending[0]
        session_clock.stop()

        assert timer.cancelled
        assert not session_clock.running
        timer.function(*timer.args)
        assert session_clock.elapsed == 0
        assert ticks == []

    def test_stale_timer_after_restart_is_ignored(self, session_clock, timers, ticks):
        session_clock.start()
        stale = timers.pending[0]
        session_clock.stop()
        session_clock.start()

        # The old timer fires late anyway
        stale.function(*stale.args)

        assert session_clock.elapsed == 0
        timers.fire()
        assert session_clock.elapsed == 1

    def test_manual_tick_only_while_running(self, session_clock):
        assert session_clock.tick() is False
        session_clock.start()
        assert session_clock.tick() is True
        assert session_clock.elapsed == 1

    def test_stop_from_tick_callback(self, timers):
        clock = None

        def stop_at_two(elapsed):
            if elapsed == 2:
                clock.stop()

        clock = SessionClock(on_tick=stop_at_two, timer_factory=timers)
        clock.start()
        timers.fire(5)

        assert clock.elapsed == 2
        assert not clock.running

    def test_callback_error_does_not_stop_clock(self, timers):
        def boom(elapsed):
            raise ValueError("bad tick")

        clock = SessionClock(on_tick=boom, timer_factory=timers)
        clock.start()
        timers.fire(2)

        assert clock.elapsed == 2
        assert clock.running

    def test_stale_generation_does_not_advance(self, session_clock, timers, ticks):
        session_clock.start()
        session_clock.stop()
        session_clock.start()

        assert session_clock._advance(generation=0) is False
        assert session_clock.elapsed == 0
        assert ticks == []
        assert len(timers.pending) == 1

    def test_restart_between_fire_and_tick(self, timers):
        """A restart racing a firing timer never lets the old timer count for the new run."""
        restarted_at = []

        class RestartOnRelease:
            def __init__(self):
                self._lock = threading.Lock()
                self.armed = False

            def __enter__(self):
                self._lock.acquire()

            def __exit__(self, *exc):
                self._lock.release()
                if self.armed:
                    self.armed = False
                    clock.stop()
                    clock.start()
                    restarted_at.append(clock.elapsed)

        clock = SessionClock(on_tick=lambda elapsed: None, timer_factory=timers)
        clock.start()
        firing = timers.pending[0]
        clock._lock = RestartOnRelease()
        clock._lock.armed = True

        firing.fire()

        assert clock.elapsed == restarted_at[0]
        assert len(timers.pending) == 1


class TestBurnerProjection:

    @pytest.fixture
    def dishes(self):
        return schedule_dual_burner([
            {"id": "r1", "name": "红烧肉", "cooking_time": 60, "prep_time": 0,
             "parallel_tasks": [{"id": "t1", "name": "炖", "duration": 60, "temperature": 95}]},
            {"id": "r2", "name": "炒青菜", "cooking_time": 30, "prep_time": 0},
            {"id": "r3", "name": "蒸鱼", "cooking_time": 30, "prep_time": 0},
        ])

    def test_both_burners_busy_at_start(self, dishes):
        state = project_burner_state(dishes, 0)

        assert state.left.active
        assert state.left.recipe_name == "红烧肉"
        assert state.left.remaining_time == 60
        assert state.left.current_task.name == "炖"
        assert state.left.temperature == 95
        assert state.right.recipe_name == "炒青菜"
        assert state.right.current_task is None

    def test_dish_end_is_exclusive(self, dishes):
        state = project_burner_state(dishes, 30)

        assert state.right.recipe_name == "蒸鱼"
        assert state.right.remaining_time == 30
        assert state.for_equipment(Equipment.LEFT).remaining_time == 30

    def test_idle_after_makespan(self, dishes):
        state = project_burner_state(dishes, 60)

        assert not state.left.active
        assert not state.right.active
        assert state.left.recipe_name is None

    def test_shared_has_no_burner(self, dishes):
        state = project_burner_state(dishes, 0)
        with pytest.raises(ValueError):
            state.for_equipment(Equipment.SHARED)


def test_remaining_minutes_never_negative():
    assert remaining_minutes(60, 15) == 45
    assert remaining_minutes(60, 75) == 0


def test_progress_percent():
    assert progress_percent(60, 15) == 25.0
    assert progress_percent(60, 90) == 100.0
    assert progress_percent(0, 5) == 0.0
