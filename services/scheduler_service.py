"""
Dual-Burner Scheduler - assigns recipes to the left and right burners.

Greedy longest-processing-time-first list scheduling over two identical
machines:

1. Each recipe occupies a burner for prep_time + cooking_time minutes
   (see RecipeInput.total_duration for defaults).
2. Recipes are taken longest first. Python's sort is stable, so recipes
   with equal durations keep their input order.
3. A recipe preferring the left burner always gets it. A recipe preferring
   the right burner always gets that one. Without a preference it goes to
   whichever burner frees up first, the left burner on a tie.
4. A dish starts when its burner's previous dish ends.

This is a heuristic (within 4/3 of the optimal makespan when no
preferences are set), not an exact solver. The function is pure and safe
to call concurrently.
"""

from typing import Any, Iterable, Mapping, Union

from models.cooking import (
    DishStatus,
    Equipment,
    RecipeInput,
    ScheduledDish,
)

RecipeLike = Union[RecipeInput, Mapping[str, Any]]


def to_recipe_input(recipe: RecipeLike) -> RecipeInput:
    """Validate a recipe mapping (or pass a RecipeInput through)."""
    if isinstance(recipe, RecipeInput):
        return recipe
    return RecipeInput.model_validate(dict(recipe))


def schedule_dual_burner(recipes: Iterable[RecipeLike]) -> list[ScheduledDish]:
    """
    Schedule recipes onto the two burners.

    Args:
        recipes: RecipeInput values or mappings with at least an `id`

    Returns:
        One ScheduledDish per recipe, in scheduling order (longest first)
    """
    inputs = [to_recipe_input(r) for r in recipes]
    ordered = sorted(inputs, key=lambda r: r.total_duration, reverse=True)

    left_end = 0
    right_end = 0
    dishes: list[ScheduledDish] = []

    for recipe in ordered:
        duration = recipe.total_duration
        preferred = recipe.preferred_equipment

        if preferred == Equipment.LEFT or (
            preferred == Equipment.SHARED and left_end <= right_end
        ):
            equipment = Equipment.LEFT
            start_time = left_end
            left_end = start_time + duration
        else:
            equipment = Equipment.RIGHT
            start_time = right_end
            right_end = start_time + duration

        dishes.append(ScheduledDish(
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            equipment=equipment,
            start_time=start_time,
            duration=duration,
            tasks=[t.model_copy(deep=True) for t in recipe.parallel_tasks],
            status=DishStatus.PENDING,
        ))

    return dishes


def calculate_total_duration(dishes: Iterable[ScheduledDish]) -> int:
    """Makespan in minutes: the latest dish end, 0 for an empty schedule."""
    return max((dish.end_time for dish in dishes), default=0)
