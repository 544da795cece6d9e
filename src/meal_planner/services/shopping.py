"""Shopping list aggregation across a date window."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.errors import InvalidInputError, ReferenceNotFoundError
from meal_planner.domain.nutrition import round_half_up
from meal_planner.domain.plans import DayPlan
from meal_planner.domain.shopping import (
    FormattedShoppingItem,
    FormattedShoppingList,
    ShoppingList,
    ShoppingListItem,
)
from meal_planner.services.meals import MealRepository
from meal_planner.services.plans import DayPlanRepository
from meal_planner.services.totals import IngredientLookup

KILOGRAM = 1000.0

_logger = logging.getLogger(__name__)


class ShoppingListRepository(Protocol):
    """Persistence interface for shopping lists."""

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        """Return a list by id, if present."""

    def get_list_for_week(self, user_id: UUID, week_start: date) -> ShoppingList | None:
        """Return the user's list starting on ``week_start``, if present."""

    def create_list(self, shopping_list: ShoppingList) -> None:
        """Persist a new list."""

    def update_list(self, shopping_list: ShoppingList) -> None:
        """Persist changes to a list."""


def aggregate_items(
    plans: list[DayPlan], meals: MealRepository, ingredients: IngredientLookup
) -> list[ShoppingListItem]:
    """Merge ingredient demand of meal-backed slots, sorted by category then name.

    Name, category and pantry flag come from the first occurrence of each
    ingredient. Every item starts unchecked.
    """
    merged: dict[UUID, ShoppingListItem] = {}
    for plan in sorted(plans, key=lambda item: item.date):
        for slot in plan.slots:
            if slot.meal_id is None:
                continue
            meal = meals.get_meal(slot.meal_id)
            if meal is None:
                _logger.warning(
                    "Meal %s missing while building shopping list", slot.meal_id
                )
                continue
            for component in meal.components:
                current = merged.get(component.ingredient_id)
                if current is not None:
                    merged[component.ingredient_id] = replace(
                        current,
                        total_weight_grams=current.total_weight_grams
                        + component.weight_grams,
                    )
                    continue
                ingredient = ingredients.get_ingredient(component.ingredient_id)
                if ingredient is None:
                    continue
                merged[component.ingredient_id] = ShoppingListItem(
                    ingredient_id=ingredient.id,
                    ingredient_name=ingredient.name,
                    total_weight_grams=component.weight_grams,
                    is_pantry_essential=ingredient.is_pantry_essential,
                    category=ingredient.category,
                    checked=False,
                )
    return sorted(
        merged.values(), key=lambda item: (item.category, item.ingredient_name)
    )


def format_weight(grams: float) -> str:
    """Render grams as ``1.2kg`` from one kilogram up, otherwise ``450g``."""
    if grams >= KILOGRAM:
        return f"{grams / KILOGRAM:.1f}kg"
    return f"{round_half_up(grams)}g"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ShoppingListService:
    """Generates and maintains one shopping list per user and week."""

    repository: ShoppingListRepository
    day_plans: DayPlanRepository
    meals: MealRepository
    ingredients: IngredientLookup
    clock: Callable[[], datetime] = field(default=_utc_now)

    def generate(self, user_id: UUID, week_start: date, week_end: date) -> ShoppingList:
        """Rebuild the list for ``[week_start, week_end]``, replacing all items."""
        if week_end < week_start:
            raise InvalidInputError(f"Window ends before it starts: {week_start}")
        plans = self.day_plans.list_day_plans(user_id, week_start, week_end)
        items = aggregate_items(plans, self.meals, self.ingredients)
        now = self.clock()
        existing = self.repository.get_list_for_week(user_id, week_start)
        if existing is not None:
            shopping_list = replace(
                existing,
                week_end=week_end,
                items=items,
                generated_at=now,
                updated_at=now,
            )
            self.repository.update_list(shopping_list)
        else:
            shopping_list = ShoppingList(
                id=uuid4(),
                user_id=user_id,
                week_start=week_start,
                week_end=week_end,
                items=items,
                generated_at=now,
                updated_at=now,
            )
            self.repository.create_list(shopping_list)
        _logger.info(
            "Shopping list generated: user_id=%s week_start=%s items=%s",
            user_id,
            week_start,
            len(items),
        )
        return shopping_list

    def get(self, user_id: UUID, week_start: date) -> ShoppingList | None:
        """Return the list for a week, if generated."""
        return self.repository.get_list_for_week(user_id, week_start)

    def toggle_item(
        self, user_id: UUID, list_id: UUID, ingredient_id: UUID, checked: bool
    ) -> ShoppingList:
        """Set the checked flag of one item."""
        shopping_list = self.repository.get_list(list_id)
        if shopping_list is None or shopping_list.user_id != user_id:
            raise ReferenceNotFoundError("Shopping list", list_id)
        items = [
            replace(item, checked=checked)
            if item.ingredient_id == ingredient_id
            else item
            for item in shopping_list.items
        ]
        updated = replace(shopping_list, items=items, updated_at=self.clock())
        self.repository.update_list(updated)
        return updated

    def get_formatted(
        self, user_id: UUID, week_start: date, exclude_pantry: bool = False
    ) -> FormattedShoppingList | None:
        """Return the list grouped by category for display."""
        shopping_list = self.repository.get_list_for_week(user_id, week_start)
        if shopping_list is None:
            return None
        items = shopping_list.items
        if exclude_pantry:
            items = [item for item in items if not item.is_pantry_essential]
        categories: dict[str, list[FormattedShoppingItem]] = {}
        for item in items:
            categories.setdefault(item.category, []).append(
                FormattedShoppingItem(
                    name=item.ingredient_name,
                    weight=format_weight(item.total_weight_grams),
                    checked=item.checked,
                )
            )
        return FormattedShoppingList(
            week_start=shopping_list.week_start,
            week_end=shopping_list.week_end,
            categories=categories,
            total_items=len(items),
            checked_items=sum(1 for item in items if item.checked),
        )
