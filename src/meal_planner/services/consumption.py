"""Consumption snapshots and the append-only consumption log."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.consumption import (
    ComponentBreakdown,
    ConsumptionLogEntry,
    ConsumptionSnapshot,
)
from meal_planner.domain.nutrition_config import NutritionConfig, resolve_targets
from meal_planner.domain.plans import DayPlan
from meal_planner.services.meals import MealRepository
from meal_planner.services.totals import IngredientLookup, contribution

_logger = logging.getLogger(__name__)


class ConsumptionLogRepository(Protocol):
    """Persistence interface for consumption log entries."""

    def create_entry(self, entry: ConsumptionLogEntry) -> None:
        """Append an entry."""

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[ConsumptionLogEntry]:
        """Return entries dated within ``[start, end]``."""


def build_snapshot(
    plan: DayPlan, meals: MealRepository, ingredients: IngredientLookup
) -> ConsumptionSnapshot:
    """Freeze a day's totals and re-derive the ingredient breakdown.

    Only meal-backed slots are expanded, using the meal's current components
    and the ingredients' current nutrient values.
    """
    components: list[ComponentBreakdown] = []
    for slot in plan.slots:
        if slot.meal_id is None:
            continue
        meal = meals.get_meal(slot.meal_id)
        if meal is None:
            _logger.warning(
                "Meal %s missing while building snapshot for plan %s",
                slot.meal_id,
                plan.id,
            )
            continue
        for component in meal.components:
            ingredient = ingredients.get_ingredient(component.ingredient_id)
            if ingredient is None:
                continue
            portion = contribution(ingredient, component.weight_grams)
            components.append(
                ComponentBreakdown(
                    ingredient_name=ingredient.name,
                    weight_grams=component.weight_grams,
                    calories=portion.calories,
                    protein=portion.protein,
                    fat=portion.fat,
                    carbs=portion.carbs,
                )
            )
    return ConsumptionSnapshot(totals=plan.totals, components=components)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ConsumptionService:
    """Records consumption snapshots for day plans."""

    repository: ConsumptionLogRepository
    meals: MealRepository
    ingredients: IngredientLookup
    clock: Callable[[], datetime] = field(default=_utc_now)

    def record(
        self, plan: DayPlan, config: NutritionConfig | None
    ) -> ConsumptionLogEntry:
        """Append a log entry with the plan snapshot and the targets in force."""
        entry = ConsumptionLogEntry(
            id=uuid4(),
            user_id=plan.user_id,
            day_plan_id=plan.id,
            date=plan.date,
            snapshot=build_snapshot(plan, self.meals, self.ingredients),
            config_snapshot=resolve_targets(config),
            consumed_at=self.clock(),
        )
        self.repository.create_entry(entry)
        return entry

    def history(
        self, user_id: UUID, start: date, end: date
    ) -> list[ConsumptionLogEntry]:
        """Return log entries for a date window, oldest first."""
        entries = self.repository.list_entries(user_id, start, end)
        return sorted(entries, key=lambda entry: (entry.date, entry.consumed_at))
