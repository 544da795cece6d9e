"""Pydantic models for planner API payloads."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from meal_planner.domain.meals import CustomComponent


class ComponentPayload(BaseModel):
    """Ingredient and raw weight supplied by a client."""

    ingredient_id: UUID
    weight_grams: float = Field(ge=0)
    preparation_method: str | None = None

    def to_domain(self) -> CustomComponent:
        """Convert to a domain component."""
        return CustomComponent(
            ingredient_id=self.ingredient_id,
            weight_grams=self.weight_grams,
            preparation_method=self.preparation_method,
        )


class SlotComponentPayload(ComponentPayload):
    """Inline slot component; its weight must be positive."""

    weight_grams: float = Field(gt=0)


class TotalsPreviewRequest(BaseModel):
    """Components to total without saving."""

    components: list[ComponentPayload]


class SlotAssignment(BaseModel):
    """Meal template or inline components for a slot."""

    meal_id: UUID | None = None
    custom_components: list[SlotComponentPayload] | None = None


class CopyDayRequest(BaseModel):
    """Target date for a day copy."""

    target_date: date


class ShoppingListRequest(BaseModel):
    """Inclusive window for shopping list generation."""

    week_start: date
    week_end: date | None = None
