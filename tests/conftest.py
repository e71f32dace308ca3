"""
Shared fixtures: an in-memory database, a hand-driven timer and speech
doubles that record what the console said.
"""

from datetime import datetime, timedelta
from typing import Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database import Base
from models.cooking import RecipeInput
from services.local_session_store import LocalSessionStore
from services.session_service import CookingSessionService
from services.speech.base import SpeechOutput


class FakeTimer:
    """threading.Timer stand-in; nothing runs until fire() is called."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fired = True
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)


class FakeTimerFactory:
    """Builds FakeTimers and remembers them."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args=args, kwargs=kwargs)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not t.cancelled and not t.fired]

    def fire(self, times: int = 1):
        """Fire the pending timers, as if `times` intervals passed."""
        for _ in range(times):
            for timer in list(self.pending):
                timer.fire()


class RecordingSpeech(SpeechOutput):
    """Speech output that keeps every utterance."""

    def __init__(self):
        self.spoken: list[str] = []
        self.stops = 0

    @property
    def supported(self) -> bool:
        return True

    def speak(self, text: str, rate: Optional[str] = None) -> None:
        self.spoken.append(text)

    def stop(self) -> None:
        self.stops += 1


class BrokenSpeech(SpeechOutput):
    """Speech output whose engine always fails."""

    @property
    def supported(self) -> bool:
        return True

    def speak(self, text: str, rate: Optional[str] = None) -> None:
        raise RuntimeError("speech engine crashed")

    def stop(self) -> None:
        pass


class FixedClock:
    """Wall clock for tests; advance() moves it forward."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 18, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads (timeouts run on a worker)."""
    import models.entities  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def local_store():
    return LocalSessionStore()


@pytest.fixture
def store(session_factory, local_store):
    return CookingSessionService(
        session_factory=session_factory,
        local_store=local_store,
        timeout=2.0,
    )


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture
def speech():
    return RecordingSpeech()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def sample_recipes() -> list[RecipeInput]:
    """Two dishes with steps; the stew prefers the left burner."""
    return [
        RecipeInput(
            id="stew",
            name="红烧肉",
            cooking_time=50,
            prep_time=10,
            equipment_needed=["left"],
            parallel_tasks=[
                {"id": "s1", "name": "焯水", "duration": 10, "equipment": "left"},
                {"id": "s2", "name": "小火慢炖", "duration": 50, "equipment": "left", "temperature": 95},
            ],
        ),
        RecipeInput(
            id="eggs",
            name="番茄炒蛋",
            cooking_time=10,
            prep_time=5,
            parallel_tasks=[
                {"id": "e1", "name": "打蛋", "duration": 5},
                {"id": "e2", "name": "翻炒", "duration": 10, "temperature": 180},
            ],
        ),
    ]
