"""Domain models for meal templates."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol
from uuid import UUID

from meal_planner.domain.nutrition import NutrientTotals


class WeightedIngredient(Protocol):
    """Anything that names an ingredient and a raw weight."""

    ingredient_id: UUID
    weight_grams: float


@dataclass(frozen=True)
class MealComponent:
    """One ingredient placed in a slot role of a meal."""

    slot: str
    ingredient_id: UUID
    weight_grams: float
    preparation_method: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class CustomComponent:
    """Ad hoc ingredient used directly in a day plan slot."""

    ingredient_id: UUID
    weight_grams: float
    preparation_method: str | None = None


@dataclass(frozen=True)
class Meal:
    """Reusable meal template with cached totals."""

    id: UUID
    user_id: UUID
    name: str
    components: list[MealComponent]
    totals: NutrientTotals
    description: str | None = None
    is_favorite: bool = False
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class MealUpdate:
    """Partial update for a meal; ``None`` leaves a field untouched."""

    name: str | None = None
    description: str | None = None
    components: list[MealComponent] | None = None
    tags: list[str] | None = None
    is_favorite: bool | None = None


@dataclass(frozen=True)
class MealComponentDetail:
    """Meal component enriched with catalog details."""

    component: MealComponent
    ingredient_name: str
    ingredient_category: str


@dataclass(frozen=True)
class MealDetail:
    """Meal with enriched components."""

    meal: Meal
    components: list[MealComponentDetail]
