"""Supabase repository for meal templates."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    isoformat_or_none,
    parse_datetime,
    totals_payload,
)
from meal_planner.domain.meals import Meal, MealComponent
from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal templates."""

    client: Client

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: UUID, favorites_only: bool = False) -> list[Meal]:
        """Return a user's meals."""
        query = self.client.table("meals").select("*").eq("user_id", str(user_id))
        if favorites_only:
            query = query.eq("is_favorite", True)
        response = query.order("updated_at", desc=True).execute()
        return [_parse_meal(row) for row in response.data or []]

    def create_meal(self, meal: Meal) -> None:
        """Insert a meal row."""
        response = self.client.table("meals").insert(_meal_payload(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")

    def update_meal(self, meal: Meal) -> None:
        """Update a meal row, components and cached totals together."""
        payload = _meal_payload(meal)
        payload.pop("id")
        payload.pop("created_at")
        response = (
            self.client.table("meals").update(payload).eq("id", str(meal.id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal")

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()


def _meal_payload(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "user_id": str(meal.user_id),
        "name": meal.name,
        "description": meal.description,
        "components": [
            {
                "slot": component.slot,
                "ingredient_id": str(component.ingredient_id),
                "weight_grams": component.weight_grams,
                "preparation_method": component.preparation_method,
                "notes": component.notes,
            }
            for component in meal.components
        ],
        **totals_payload(meal.totals, prefix="total_"),
        "is_favorite": meal.is_favorite,
        "tags": list(meal.tags),
        "created_at": isoformat_or_none(meal.created_at),
        "updated_at": isoformat_or_none(meal.updated_at),
    }


def _parse_meal(row: dict[str, object]) -> Meal:
    """Parse a meal row into a domain model."""
    components = [
        MealComponent(
            slot=str(item.get("slot", "")),
            ingredient_id=UUID(str(item["ingredient_id"])),
            weight_grams=float(item.get("weight_grams", 0.0)),
            preparation_method=item.get("preparation_method"),
            notes=item.get("notes"),
        )
        for item in row.get("components") or []
    ]
    return Meal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        description=row.get("description"),
        components=components,
        totals=NutrientTotals.from_mapping(row, prefix="total_"),
        is_favorite=bool(row.get("is_favorite", False)),
        tags=list(row.get("tags") or []),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
