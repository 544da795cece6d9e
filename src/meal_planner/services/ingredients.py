"""Services for the ingredient catalog."""

from collections import Counter
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.errors import InvalidInputError, ReferenceNotFoundError
from meal_planner.domain.ingredients import INGREDIENT_CATEGORIES, Ingredient
from meal_planner.domain.nutrition import NutrientTotals

_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "category",
        "is_pantry_essential",
        "medical_tags",
        "preparation_methods",
        "is_cooked",
        "yield_factor",
    }
)


class IngredientRepository(Protocol):
    """Persistence interface for catalog ingredients."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def list_ingredients(
        self, user_id: UUID, category: str | None = None
    ) -> list[Ingredient]:
        """Return a user's ingredients, optionally in one category."""

    def create_ingredient(self, ingredient: Ingredient) -> None:
        """Persist a new ingredient."""

    def update_ingredient(self, ingredient: Ingredient) -> None:
        """Persist changes to an ingredient."""

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient."""


@dataclass
class IngredientService:
    """Catalog maintenance for a user's ingredients."""

    repository: IngredientRepository

    def get(self, user_id: UUID, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient owned by the user."""
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None or ingredient.user_id != user_id:
            return None
        return ingredient

    def list_ingredients(
        self, user_id: UUID, category: str | None = None, search: str | None = None
    ) -> list[Ingredient]:
        """List ingredients by name, filtered by category and name substring."""
        ingredients = self.repository.list_ingredients(user_id, category or None)
        if search:
            needle = search.lower()
            ingredients = [item for item in ingredients if needle in item.name.lower()]
        return sorted(ingredients, key=lambda item: item.name)

    def category_counts(self, user_id: UUID) -> dict[str, int]:
        """Return how many of the user's ingredients fall in each used category."""
        counts = Counter(
            item.category for item in self.repository.list_ingredients(user_id)
        )
        return dict(sorted(counts.items()))

    def create(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        category: str,
        per_100g: NutrientTotals,
        *,
        is_pantry_essential: bool = False,
        medical_tags: list[str] | None = None,
        preparation_methods: list[str] | None = None,
        is_cooked: bool = False,
        yield_factor: float | None = None,
        description: str | None = None,
        fdc_id: int | None = None,
    ) -> Ingredient:
        """Create a catalog ingredient."""
        _check_category(category)
        now = datetime.now(tz=UTC)
        ingredient = Ingredient(
            id=uuid4(),
            user_id=user_id,
            name=name,
            category=category,
            per_100g=per_100g,
            is_pantry_essential=is_pantry_essential,
            medical_tags=list(medical_tags or []),
            preparation_methods=list(preparation_methods or []),
            is_cooked=is_cooked,
            yield_factor=yield_factor,
            description=description,
            fdc_id=fdc_id,
            created_at=now,
            updated_at=now,
        )
        self.repository.create_ingredient(ingredient)
        return ingredient

    def update(
        self,
        user_id: UUID,
        ingredient_id: UUID,
        changes: dict[str, object],
        per_100g: NutrientTotals | None = None,
    ) -> Ingredient:
        """Apply a partial update to an ingredient."""
        current = self._require(user_id, ingredient_id)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown ingredient fields: {sorted(unknown)}")
        if "category" in changes:
            _check_category(str(changes["category"]))
        updated = replace(
            current,
            **changes,
            per_100g=per_100g or current.per_100g,
            updated_at=datetime.now(tz=UTC),
        )
        self.repository.update_ingredient(updated)
        return updated

    def remove(self, user_id: UUID, ingredient_id: UUID) -> None:
        """Delete an ingredient owned by the user."""
        self._require(user_id, ingredient_id)
        self.repository.delete_ingredient(ingredient_id)

    def _require(self, user_id: UUID, ingredient_id: UUID) -> Ingredient:
        ingredient = self.get(user_id, ingredient_id)
        if ingredient is None:
            raise ReferenceNotFoundError("Ingredient", ingredient_id)
        return ingredient


def _check_category(category: str) -> None:
    if category not in INGREDIENT_CATEGORIES:
        raise InvalidInputError(f"Unknown ingredient category: {category}")
