"""
Domain model validation tests.
"""

import pytest
from pydantic import ValidationError

from models.cooking import (
    CookingSessionData,
    CookingTask,
    Equipment,
    RecipeInput,
    ScheduledDish,
)
from models.user_preferences import (
    UserPreferencesData,
    rate_to_slider_value,
    slider_value_to_rate,
)


class TestRecipeInput:

    def test_only_id_required(self):
        recipe = RecipeInput(id=3)
        assert recipe.id == "3"
        assert recipe.name == ""
        assert recipe.preferred_equipment == Equipment.SHARED
        assert recipe.total_duration == 40

    def test_unreadable_times_fall_back_to_defaults(self):
        recipe = RecipeInput(id="r", cooking_time="about 20", prep_time="15")
        assert recipe.cooking_time is None
        assert recipe.prep_time == 15
        assert recipe.total_duration == 45

    def test_equipment_labels(self):
        assert RecipeInput(id="a", equipment_needed=["LEFT", "right"]).preferred_equipment == Equipment.LEFT
        assert RecipeInput(id="a", equipment_needed="right").preferred_equipment == Equipment.RIGHT
        assert RecipeInput(id="a", equipment_needed=["wok"]).preferred_equipment == Equipment.SHARED
        assert RecipeInput(id="a", equipment_needed=None).equipment_needed == []

    def test_missing_id(self):
        with pytest.raises(ValidationError):
            RecipeInput(name="no id")

    def test_extra_fields_ignored(self):
        recipe = RecipeInput(id="a", calories=300, difficulty="easy")
        assert not hasattr(recipe, "calories")


class TestCookingTask:

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            CookingTask(id="t", name="bad", duration=-1)

    def test_unknown_equipment_is_shared(self):
        assert CookingTask(id=1, name="切菜", equipment="board").equipment == Equipment.SHARED


class TestScheduledDish:

    def test_must_be_on_a_burner(self):
        with pytest.raises(ValidationError):
            ScheduledDish(recipe_id="r", equipment=Equipment.SHARED, start_time=0, duration=10)

    def test_duration_positive(self):
        with pytest.raises(ValidationError):
            ScheduledDish(recipe_id="r", equipment=Equipment.LEFT, start_time=0, duration=0)

    def test_occupancy_window(self):
        dish = ScheduledDish(recipe_id="r", equipment=Equipment.LEFT, start_time=10, duration=5)
        assert dish.end_time == 15
        assert not dish.occupies(9)
        assert dish.occupies(10)
        assert dish.occupies(14)
        assert not dish.occupies(15)


def test_temporary_session():
    assert CookingSessionData(id="temp-1", user_id="u").is_temporary
    assert not CookingSessionData(id="abc", user_id="u").is_temporary


class TestUserPreferences:

    def test_defaults_for_bad_json(self):
        prefs = UserPreferencesData.from_json("{not json")
        assert prefs.voice.enabled is True
        assert prefs.voice.name == "zh-CN-XiaoxiaoNeural"

    def test_round_trip(self):
        prefs = UserPreferencesData()
        prefs.voice.rate = "+10%"
        assert UserPreferencesData.from_json(prefs.to_json()).voice.rate == "+10%"

    def test_speed_slider(self):
        assert rate_to_slider_value("-20%") == -2
        assert rate_to_slider_value("+55%") == 0
        assert slider_value_to_rate(2) == "+20%"
        assert slider_value_to_rate(9) == "+0%"
