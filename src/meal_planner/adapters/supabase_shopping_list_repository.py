"""Supabase repository for shopping lists."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    isoformat_or_none,
    parse_date,
    parse_datetime,
)
from meal_planner.domain.shopping import ShoppingList, ShoppingListItem
from meal_planner.services.shopping import ShoppingListRepository


@dataclass
class SupabaseShoppingListRepository(ShoppingListRepository):
    """Supabase implementation for weekly shopping lists."""

    client: Client

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        """Return a list by id, if present."""
        response = (
            self.client.table("shopping_lists")
            .select("*")
            .eq("id", str(list_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_list(response.data[0])

    def get_list_for_week(self, user_id: UUID, week_start: date) -> ShoppingList | None:
        """Return the user's list starting on ``week_start``, if present."""
        response = (
            self.client.table("shopping_lists")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("week_start", week_start.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_list(response.data[0])

    def create_list(self, shopping_list: ShoppingList) -> None:
        """Insert a list row."""
        response = (
            self.client.table("shopping_lists")
            .insert(_list_payload(shopping_list))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create shopping list")

    def update_list(self, shopping_list: ShoppingList) -> None:
        """Replace the items and window of a list."""
        payload = _list_payload(shopping_list)
        for key in ("id", "user_id", "week_start"):
            payload.pop(key)
        response = (
            self.client.table("shopping_lists")
            .update(payload)
            .eq("id", str(shopping_list.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update shopping list")


def _list_payload(shopping_list: ShoppingList) -> dict[str, object]:
    return {
        "id": str(shopping_list.id),
        "user_id": str(shopping_list.user_id),
        "week_start": shopping_list.week_start.isoformat(),
        "week_end": shopping_list.week_end.isoformat(),
        "items": [
            {
                "ingredient_id": str(item.ingredient_id),
                "ingredient_name": item.ingredient_name,
                "total_weight_grams": item.total_weight_grams,
                "is_pantry_essential": item.is_pantry_essential,
                "category": item.category,
                "checked": item.checked,
            }
            for item in shopping_list.items
        ],
        "generated_at": isoformat_or_none(shopping_list.generated_at),
        "updated_at": isoformat_or_none(shopping_list.updated_at),
    }


def _parse_list(row: dict[str, object]) -> ShoppingList:
    return ShoppingList(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        week_start=parse_date(row["week_start"]),
        week_end=parse_date(row["week_end"]),
        items=[
            ShoppingListItem(
                ingredient_id=UUID(str(item["ingredient_id"])),
                ingredient_name=str(item.get("ingredient_name", "")),
                total_weight_grams=float(item.get("total_weight_grams", 0.0)),
                is_pantry_essential=bool(item.get("is_pantry_essential", False)),
                category=str(item.get("category", "other")),
                checked=bool(item.get("checked", False)),
            )
            for item in row.get("items") or []
        ],
        generated_at=parse_datetime(row.get("generated_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
