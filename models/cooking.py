"""
Cooking domain models - Pydantic models for recipes, schedules and sessions.

These are the values that flow between the scheduler, the session store and
the controller. Recipe input is validated once here, so the rest of the code
can trust durations and equipment values.

Time units:
- Schedule times and durations are minutes relative to session start
- Progress durations are seconds (observed wall-clock time)
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Defaults applied when a recipe doesn't declare its times
DEFAULT_COOKING_TIME = 30
DEFAULT_PREP_TIME = 10


class Equipment(str, Enum):
    """Cooking resource a task or dish is bound to."""
    LEFT = "left"
    RIGHT = "right"
    SHARED = "shared"


class TaskStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class DishStatus(str, Enum):
    PENDING = "pending"
    COOKING = "cooking"
    COMPLETED = "completed"


class SessionStatus(str, Enum):
    """
    Session lifecycle status.

    PAUSED exists for documents written by other clients; the controller
    never persists it (pause only stops the local clock).
    """
    PENDING = "pending"
    COOKING = "cooking"
    PAUSED = "paused"
    COMPLETED = "completed"


class ProgressStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    SKIPPED = "skipped"


def _to_equipment(value: Any) -> Equipment:
    """Map any equipment label to an Equipment, unknown names become SHARED."""
    if isinstance(value, Equipment):
        return value
    try:
        return Equipment(str(value).strip().lower())
    except ValueError:
        return Equipment.SHARED


class CookingTask(BaseModel):
    """A named sub-step of one dish."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    duration: int = Field(default=0, ge=0, description="Minutes")
    equipment: Equipment = Equipment.SHARED
    dependencies: list[str] = Field(default_factory=list)
    priority: Optional[int] = None
    status: TaskStatus = TaskStatus.PENDING
    temperature: Optional[int] = Field(default=None, description="Degrees Celsius")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("equipment", mode="before")
    @classmethod
    def _coerce_equipment(cls, value: Any) -> Equipment:
        return _to_equipment(value)


class RecipeInput(BaseModel):
    """
    A recipe as the scheduler sees it.

    Only `id` is required. Missing or negative times fall back to the
    defaults; a zero time is kept. `equipment_needed[0]` is the preferred
    burner, an empty list means no preference.
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    cooking_time: Optional[int] = None
    prep_time: Optional[int] = None
    equipment_needed: list[Equipment] = Field(default_factory=list)
    parallel_tasks: list[CookingTask] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("cooking_time", "prep_time", mode="before")
    @classmethod
    def _drop_negative(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            value = int(value)
        except (TypeError, ValueError):
            return None
        return value if value >= 0 else None

    @field_validator("equipment_needed", mode="before")
    @classmethod
    def _coerce_equipment_list(cls, value: Any) -> list[Equipment]:
        if not value:
            return []
        if isinstance(value, (str, Equipment)):
            value = [value]
        return [_to_equipment(v) for v in value]

    @field_validator("parallel_tasks", mode="before")
    @classmethod
    def _none_tasks(cls, value: Any) -> Any:
        return value or []

    @property
    def total_duration(self) -> int:
        """Burner occupancy in minutes (prep + cook), always positive."""
        cooking = DEFAULT_COOKING_TIME if self.cooking_time is None else self.cooking_time
        prep = DEFAULT_PREP_TIME if self.prep_time is None else self.prep_time
        total = cooking + prep
        if total <= 0:
            return DEFAULT_COOKING_TIME + DEFAULT_PREP_TIME
        return total

    @property
    def preferred_equipment(self) -> Equipment:
        return self.equipment_needed[0] if self.equipment_needed else Equipment.SHARED


class ScheduledDish(BaseModel):
    """One recipe's contiguous occupancy of one burner."""

    recipe_id: str
    recipe_name: str = ""
    equipment: Equipment
    start_time: int = Field(ge=0)
    duration: int = Field(gt=0)
    tasks: list[CookingTask] = Field(default_factory=list)
    status: DishStatus = DishStatus.PENDING

    @field_validator("equipment")
    @classmethod
    def _single_burner(cls, value: Equipment) -> Equipment:
        if value == Equipment.SHARED:
            raise ValueError("a scheduled dish must be on the left or right burner")
        return value

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    def occupies(self, elapsed: int) -> bool:
        """True when `elapsed` falls inside [start, start + duration)."""
        return self.start_time <= elapsed < self.end_time


class CookingSessionData(BaseModel):
    """
    The cooking session aggregate.

    `total_duration` is the makespan of `scheduled_dishes` in minutes.
    """

    id: str
    user_id: str
    name: Optional[str] = None
    recipes: list[str] = Field(default_factory=list)
    scheduled_dishes: list[ScheduledDish] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.PENDING
    current_step_index: int = 0
    started_at: Optional[datetime] = None
    estimated_end_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    total_duration: int = 0
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_temporary(self) -> bool:
        """Staged locally, not yet in the durable store."""
        return self.id.startswith("temp-")


class CookingProgressData(BaseModel):
    """Append-only record of a step starting or finishing."""

    id: Optional[int] = None
    session_id: str
    step_index: int
    equipment: Equipment = Equipment.SHARED
    status: ProgressStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[int] = None
    temperature: Optional[int] = None
    notes: Optional[str] = None
    voice_prompts: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)


class BurnerState(BaseModel):
    """Live view of one burner."""
    active: bool = False
    recipe_name: Optional[str] = None
    current_task: Optional[CookingTask] = None
    remaining_time: int = 0
    temperature: Optional[int] = None


class DualBurnerState(BaseModel):
    """Derived state of both burners; recomputed on every tick."""
    left: BurnerState = Field(default_factory=BurnerState)
    right: BurnerState = Field(default_factory=BurnerState)

    def for_equipment(self, equipment: Equipment) -> BurnerState:
        if equipment == Equipment.LEFT:
            return self.left
        if equipment == Equipment.RIGHT:
            return self.right
        raise ValueError(f"No burner for equipment {equipment.value!r}")
