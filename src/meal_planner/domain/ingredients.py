"""Domain models for the ingredient catalog."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from meal_planner.domain.nutrition import NutrientTotals

INGREDIENT_CATEGORIES = frozenset(
    {"protein", "fat", "vegetable", "condiment", "spice", "other"}
)


@dataclass(frozen=True)
class Ingredient:
    """Catalog entry with nutrient density per 100g of raw weight."""

    id: UUID
    user_id: UUID
    name: str
    category: str
    per_100g: NutrientTotals
    is_pantry_essential: bool = False
    medical_tags: list[str] = field(default_factory=list)
    preparation_methods: list[str] = field(default_factory=list)
    is_cooked: bool = False
    yield_factor: float | None = None
    description: str | None = None
    fdc_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
