"""Meal template service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.errors import ReferenceNotFoundError
from meal_planner.domain.meals import (
    Meal,
    MealComponent,
    MealComponentDetail,
    MealDetail,
    MealUpdate,
    WeightedIngredient,
)
from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.services.totals import (
    IngredientLookup,
    check_weights,
    compute_totals,
)

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meal templates."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""

    def list_meals(self, user_id: UUID, favorites_only: bool = False) -> list[Meal]:
        """Return a user's meals."""

    def create_meal(self, meal: Meal) -> None:
        """Persist a new meal."""

    def update_meal(self, meal: Meal) -> None:
        """Persist changes to a meal."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealService:
    """Creates and edits meal templates, keeping cached totals in sync."""

    repository: MealRepository
    ingredients: IngredientLookup
    clock: Callable[[], datetime] = field(default=_utc_now)

    def preview_totals(self, components: list[WeightedIngredient]) -> NutrientTotals:
        """Compute totals for components that have not been saved."""
        return compute_totals(components, self.ingredients)

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        components: list[MealComponent],
        tags: list[str] | None = None,
        description: str | None = None,
    ) -> Meal:
        """Create a meal and cache its totals."""
        check_weights(components)
        now = self.clock()
        meal = Meal(
            id=uuid4(),
            user_id=user_id,
            name=name,
            description=description,
            components=list(components),
            totals=compute_totals(components, self.ingredients),
            is_favorite=False,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )
        self.repository.create_meal(meal)
        _logger.info("Meal created: meal_id=%s components=%s", meal.id, len(components))
        return meal

    def update_meal(self, user_id: UUID, meal_id: UUID, changes: MealUpdate) -> Meal:
        """Apply a partial update; totals are recomputed only for new components."""
        meal = self.require_meal(user_id, meal_id)
        updates: dict[str, object] = {"updated_at": self.clock()}
        if changes.name is not None:
            updates["name"] = changes.name
        if changes.description is not None:
            updates["description"] = changes.description
        if changes.tags is not None:
            updates["tags"] = list(changes.tags)
        if changes.is_favorite is not None:
            updates["is_favorite"] = changes.is_favorite
        if changes.components is not None:
            check_weights(changes.components)
            updates["components"] = list(changes.components)
            updates["totals"] = compute_totals(changes.components, self.ingredients)
        updated = replace(meal, **updates)
        self.repository.update_meal(updated)
        return updated

    def duplicate_meal(self, user_id: UUID, meal_id: UUID) -> Meal:
        """Copy a meal under a new id, named ``<name> (copy)``."""
        meal = self.require_meal(user_id, meal_id)
        now = self.clock()
        copy = replace(
            meal,
            id=uuid4(),
            name=f"{meal.name} (copy)",
            components=list(meal.components),
            tags=list(meal.tags),
            is_favorite=False,
            created_at=now,
            updated_at=now,
        )
        self.repository.create_meal(copy)
        return copy

    def remove_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal. Day plans and consumption logs keep their copies."""
        self.require_meal(user_id, meal_id)
        self.repository.delete_meal(meal_id)
        _logger.info("Meal deleted: meal_id=%s", meal_id)

    def list_meals(self, user_id: UUID, favorites_only: bool = False) -> list[Meal]:
        """Return meals, most recently updated first."""
        meals = self.repository.list_meals(user_id, favorites_only)
        return sorted(
            meals,
            key=lambda meal: meal.updated_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )

    def get_meal(self, user_id: UUID, meal_id: UUID) -> Meal | None:
        """Return a meal owned by the user."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            return None
        return meal

    def get_meal_detail(self, user_id: UUID, meal_id: UUID) -> MealDetail | None:
        """Return a meal with ingredient names and categories."""
        meal = self.get_meal(user_id, meal_id)
        if meal is None:
            return None
        details = []
        for component in meal.components:
            ingredient = self.ingredients.get_ingredient(component.ingredient_id)
            details.append(
                MealComponentDetail(
                    component=component,
                    ingredient_name=ingredient.name if ingredient else "Unknown",
                    ingredient_category=(
                        ingredient.category if ingredient else "unknown"
                    ),
                )
            )
        return MealDetail(meal=meal, components=details)

    def require_meal(self, user_id: UUID, meal_id: UUID) -> Meal:
        """Return a meal owned by the user or raise."""
        meal = self.get_meal(user_id, meal_id)
        if meal is None:
            raise ReferenceNotFoundError("Meal", meal_id)
        return meal

