"""Domain models for shopping lists."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class ShoppingListItem:
    """Aggregated demand for a single ingredient."""

    ingredient_id: UUID
    ingredient_name: str
    total_weight_grams: float
    is_pantry_essential: bool
    category: str
    checked: bool = False


@dataclass(frozen=True)
class ShoppingList:
    """Shopping list for an inclusive date window."""

    id: UUID
    user_id: UUID
    week_start: date
    week_end: date
    items: list[ShoppingListItem]
    generated_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FormattedShoppingItem:
    """Display row for a shopping list item."""

    name: str
    weight: str
    checked: bool


@dataclass(frozen=True)
class FormattedShoppingList:
    """Shopping list grouped by category for display."""

    week_start: date
    week_end: date
    categories: dict[str, list[FormattedShoppingItem]]
    total_items: int
    checked_items: int
