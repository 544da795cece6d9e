"""Supabase repository for catalog ingredients."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    isoformat_or_none,
    parse_datetime,
    totals_payload,
)
from meal_planner.domain.ingredients import Ingredient
from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.services.ingredients import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase-backed ingredient catalog."""

    client: Client

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def list_ingredients(
        self, user_id: UUID, category: str | None = None
    ) -> list[Ingredient]:
        """Return a user's ingredients, optionally in one category."""
        query = self.client.table("ingredients").select("*").eq("user_id", str(user_id))
        if category:
            query = query.eq("category", category)
        response = query.order("name", desc=False).execute()
        return [_parse_ingredient(row) for row in response.data or []]

    def create_ingredient(self, ingredient: Ingredient) -> None:
        """Insert an ingredient row."""
        response = (
            self.client.table("ingredients")
            .insert(_ingredient_payload(ingredient))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ingredient")

    def update_ingredient(self, ingredient: Ingredient) -> None:
        """Update an ingredient row."""
        payload = _ingredient_payload(ingredient)
        payload.pop("id")
        payload.pop("created_at")
        response = (
            self.client.table("ingredients")
            .update(payload)
            .eq("id", str(ingredient.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update ingredient")

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient row."""
        self.client.table("ingredients").delete().eq(
            "id", str(ingredient_id)
        ).execute()


def _ingredient_payload(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": str(ingredient.id),
        "user_id": str(ingredient.user_id),
        "name": ingredient.name,
        "description": ingredient.description,
        "fdc_id": ingredient.fdc_id,
        "category": ingredient.category,
        **totals_payload(ingredient.per_100g),
        "is_pantry_essential": ingredient.is_pantry_essential,
        "medical_tags": list(ingredient.medical_tags),
        "preparation_methods": list(ingredient.preparation_methods),
        "is_cooked": ingredient.is_cooked,
        "yield_factor": ingredient.yield_factor,
        "created_at": isoformat_or_none(ingredient.created_at),
        "updated_at": isoformat_or_none(ingredient.updated_at),
    }


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row into a domain model."""
    yield_factor = row.get("yield_factor")
    fdc_id = row.get("fdc_id")
    return Ingredient(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        category=str(row.get("category", "other")),
        per_100g=NutrientTotals.from_mapping(row),
        is_pantry_essential=bool(row.get("is_pantry_essential", False)),
        medical_tags=list(row.get("medical_tags") or []),
        preparation_methods=list(row.get("preparation_methods") or []),
        is_cooked=bool(row.get("is_cooked", False)),
        yield_factor=float(yield_factor) if yield_factor is not None else None,
        description=row.get("description"),
        fdc_id=int(fdc_id) if fdc_id is not None else None,
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
