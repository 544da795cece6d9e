"""Domain models for the consumption log."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.domain.nutrition_config import NutritionTargets


@dataclass(frozen=True)
class ComponentBreakdown:
    """Per-ingredient contribution frozen at consumption time."""

    ingredient_name: str
    weight_grams: float
    calories: float
    protein: float
    fat: float
    carbs: float


@dataclass(frozen=True)
class ConsumptionSnapshot:
    """Day totals plus the resolved ingredient breakdown."""

    totals: NutrientTotals
    components: list[ComponentBreakdown]


@dataclass(frozen=True)
class ConsumptionLogEntry:
    """Append-only record of a consumed day."""

    id: UUID
    user_id: UUID
    day_plan_id: UUID
    date: date
    snapshot: ConsumptionSnapshot
    config_snapshot: NutritionTargets
    consumed_at: datetime
