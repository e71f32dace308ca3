"""
Recipe Service - the recipe source for the selection screen.

This service is pure Python with no Streamlit dependencies.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.database import SessionLocal
from config.settings import get_settings
from models.cooking import RecipeInput
from models.entities import Recipe
from services.timeouts import call_with_timeout

logger = logging.getLogger(__name__)


# Offered when the recipe table is slow, failing or empty
FALLBACK_RECIPES = [
    RecipeInput(id="fb1", name="番茄炒蛋", cooking_time=15),
    RecipeInput(id="fb2", name="宫保鸡丁", cooking_time=25),
    RecipeInput(id="fb3", name="清蒸鲈鱼", cooking_time=20),
    RecipeInput(id="fb4", name="西兰花炒虾仁", cooking_time=15),
    RecipeInput(id="fb5", name="红烧肉", cooking_time=60),
]


class RecipeService:
    """Service for cookable recipe access."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory
        self.settings = get_settings()

    def list_cookable(self, limit: Optional[int] = None) -> list[RecipeInput]:
        """Recipes ordered by name, up to `limit` (default from settings)."""
        db = self.session_factory()
        try:
            recipes = db.query(Recipe).order_by(Recipe.Name).limit(
                limit or self.settings.recipe_list_limit
            ).all()
            return [self._to_input(r) for r in recipes]
        finally:
            db.close()

    def list_cookable_with_fallback(self, timeout: Optional[float] = None) -> list[RecipeInput]:
        """
        list_cookable() bounded by a timeout.

        Returns:
            The stored recipes, or FALLBACK_RECIPES when the call times out,
            fails, or finds nothing
        """
        timeout = self.settings.store_timeout_seconds if timeout is None else timeout
        try:
            recipes = call_with_timeout(self.list_cookable, timeout, "Listing cookable recipes")
        except (SQLAlchemyError, TimeoutError) as e:
            logger.warning(f"Recipe source unavailable, using fallback recipes: {e}")
            return [r.model_copy(deep=True) for r in FALLBACK_RECIPES]

        if not recipes:
            logger.info("No recipes stored, using fallback recipes")
            return [r.model_copy(deep=True) for r in FALLBACK_RECIPES]
        return recipes

    def add(self, recipe: RecipeInput, description: Optional[str] = None) -> RecipeInput:
        """Store a recipe and return it with its database id."""
        db = self.session_factory()
        try:
            record = Recipe(
                Name=recipe.name,
                Description=description,
                PrepTime=recipe.prep_time,
                CookTime=recipe.cooking_time,
                EquipmentNeeded=[e.value for e in recipe.equipment_needed],
                ParallelTasks=[t.model_dump(mode="json") for t in recipe.parallel_tasks],
            )
            db.add(record)
            db.commit()
            db.refresh(record)
            return self._to_input(record)
        finally:
            db.close()

    def seed_if_empty(self) -> int:
        """
        Store the fallback recipes when the recipe table is empty.

        Returns:
            Number of recipes added
        """
        db = self.session_factory()
        try:
            if db.query(Recipe).first() is not None:
                return 0
        finally:
            db.close()

        for recipe in FALLBACK_RECIPES:
            self.add(recipe)
        logger.info(f"Seeded {len(FALLBACK_RECIPES)} starter recipes")
        return len(FALLBACK_RECIPES)

    @staticmethod
    def _to_input(record: Recipe) -> RecipeInput:
        return RecipeInput(
            id=str(record.RecipeId),
            name=record.Name,
            cooking_time=record.CookTime,
            prep_time=record.PrepTime,
            equipment_needed=record.EquipmentNeeded or [],
            parallel_tasks=record.ParallelTasks or [],
        )
