"""Domain models for day plans."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from meal_planner.domain.meals import CustomComponent
from meal_planner.domain.nutrition import NutrientTotals


@dataclass(frozen=True)
class DayPlanSlot:
    """A meal-sized allocation within a day.

    Either ``meal_id`` or ``custom_components`` is set. ``totals`` is a
    denormalized copy taken when the slot was assigned.
    """

    slot_index: int
    totals: NutrientTotals
    meal_id: UUID | None = None
    custom_components: list[CustomComponent] | None = None


@dataclass(frozen=True)
class DayPlan:
    """Planned nutrition for one calendar date."""

    id: UUID
    user_id: UUID
    date: date
    day_of_week: int
    slots: list[DayPlanSlot]
    totals: NutrientTotals
    warnings: list[str] = field(default_factory=list)
    status: str = "planned"
    consumed_at: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DayPlanUpdate:
    """Result of a slot mutation; ``plan`` is None when the plan was deleted."""

    plan: DayPlan | None
    warnings: list[str]


@dataclass(frozen=True)
class SlotView:
    """Slot with the name of its meal template, if any."""

    slot: DayPlanSlot
    meal_name: str | None


@dataclass(frozen=True)
class DayPlanView:
    """Day plan enriched for display."""

    plan: DayPlan
    slots: list[SlotView]


@dataclass(frozen=True)
class WeekDay:
    """One day of a week view."""

    date: date
    day_of_week: int
    plan: DayPlan | None
