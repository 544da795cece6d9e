"""Nutrient totals for weighted ingredient compositions."""

import logging
from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from meal_planner.domain.errors import InvalidInputError
from meal_planner.domain.ingredients import Ingredient
from meal_planner.domain.meals import WeightedIngredient
from meal_planner.domain.nutrition import NutrientTotals, sum_totals

_logger = logging.getLogger(__name__)


class IngredientLookup(Protocol):
    """Read access to catalog ingredients."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""


def contribution(ingredient: Ingredient, weight_grams: float) -> NutrientTotals:
    """Return the unrounded nutrients supplied by ``weight_grams`` of raw weight."""
    return ingredient.per_100g.scaled(weight_grams / 100.0)


def compute_totals(
    components: Iterable[WeightedIngredient], ingredients: IngredientLookup
) -> NutrientTotals:
    """Sum component contributions, rounded to one decimal per field.

    Components whose ingredient cannot be found contribute nothing.
    """
    parts: list[NutrientTotals] = []
    for component in components:
        ingredient = ingredients.get_ingredient(component.ingredient_id)
        if ingredient is None:
            _logger.debug(
                "Skipping missing ingredient %s in totals", component.ingredient_id
            )
            continue
        parts.append(contribution(ingredient, component.weight_grams))
    return sum_totals(parts)


def check_weights(components: Iterable[WeightedIngredient]) -> None:
    """Raise unless every component has a positive raw weight."""
    for component in components:
        if component.weight_grams <= 0:
            raise InvalidInputError(
                f"Component weight must be positive: {component.weight_grams}"
            )
