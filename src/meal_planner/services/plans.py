"""Day plan assembly: slot upserts, day totals and validation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.consumption import ConsumptionLogEntry
from meal_planner.domain.errors import InvalidInputError, PreconditionFailedError
from meal_planner.domain.meals import CustomComponent
from meal_planner.domain.nutrition import NutrientTotals, sum_totals
from meal_planner.domain.plans import (
    DayPlan,
    DayPlanSlot,
    DayPlanUpdate,
    DayPlanView,
    SlotView,
    WeekDay,
)
from meal_planner.services.consumption import ConsumptionService
from meal_planner.services.meals import MealService
from meal_planner.services.nutrition_config import NutritionConfigRepository
from meal_planner.services.schedule import day_of_week, week_dates
from meal_planner.services.totals import (
    IngredientLookup,
    check_weights,
    compute_totals,
)
from meal_planner.services.validation import validate_day

_logger = logging.getLogger(__name__)


class DayPlanRepository(Protocol):
    """Persistence interface for day plans.

    Each method is expected to run inside the storage layer's per-record
    transaction; the service performs read, compute, then a single write.
    """

    def get_day_plan(self, user_id: UUID, day: date) -> DayPlan | None:
        """Return the user's plan for a date, if present."""

    def list_day_plans(self, user_id: UUID, start: date, end: date) -> list[DayPlan]:
        """Return plans dated within ``[start, end]``."""

    def create_day_plan(self, plan: DayPlan) -> None:
        """Persist a new plan."""

    def update_day_plan(self, plan: DayPlan) -> None:
        """Persist slots, totals, warnings and status of a plan in one write."""

    def delete_day_plan(self, plan_id: UUID) -> None:
        """Delete a plan."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DayPlanService:
    """Maintains day plans so totals and warnings always match the slots."""

    repository: DayPlanRepository
    meal_service: MealService
    ingredients: IngredientLookup
    configs: NutritionConfigRepository
    consumption_service: ConsumptionService
    clock: Callable[[], datetime] = field(default=_utc_now)

    def get_day(self, user_id: UUID, day: date) -> DayPlanView | None:
        """Return a plan with meal names attached to meal-backed slots."""
        plan = self.repository.get_day_plan(user_id, day)
        if plan is None:
            return None
        views = []
        for slot in plan.slots:
            meal_name = None
            if slot.meal_id is not None:
                meal = self.meal_service.get_meal(user_id, slot.meal_id)
                meal_name = meal.name if meal else "Unknown"
            views.append(SlotView(slot=slot, meal_name=meal_name))
        return DayPlanView(plan=plan, slots=views)

    def get_week(self, user_id: UUID, start: date) -> list[WeekDay]:
        """Return seven days from ``start`` with their plans, if any."""
        days = week_dates(start)
        plans = {
            plan.date: plan
            for plan in self.repository.list_day_plans(user_id, days[0], days[-1])
        }
        return [
            WeekDay(date=day, day_of_week=day_of_week(day), plan=plans.get(day))
            for day in days
        ]

    def set_slot(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        slot_index: int,
        *,
        meal_id: UUID | None = None,
        custom_components: list[CustomComponent] | None = None,
    ) -> DayPlanUpdate:
        """Assign a meal template or inline components to a slot.

        Meal totals are copied into the slot at assignment time. An existing
        slot with the same index is replaced, otherwise the slot is appended.
        """
        if slot_index < 0:
            raise InvalidInputError(f"Slot index must be non-negative: {slot_index}")
        if (meal_id is None) == (custom_components is None):
            raise InvalidInputError(
                "Provide exactly one of meal_id or custom_components"
            )

        if meal_id is not None:
            meal = self.meal_service.require_meal(user_id, meal_id)
            slot = DayPlanSlot(
                slot_index=slot_index, totals=meal.totals, meal_id=meal.id
            )
        else:
            components = list(custom_components or [])
            check_weights(components)
            slot = DayPlanSlot(
                slot_index=slot_index,
                totals=compute_totals(components, self.ingredients),
                custom_components=components,
            )

        plan = self.repository.get_day_plan(user_id, day)
        now = self.clock()
        if plan is None:
            totals, warnings = self._recompute(user_id, [slot])
            plan = DayPlan(
                id=uuid4(),
                user_id=user_id,
                date=day,
                day_of_week=day_of_week(day),
                slots=[slot],
                totals=totals,
                warnings=warnings,
                status="planned",
                created_at=now,
                updated_at=now,
            )
            self.repository.create_day_plan(plan)
            _logger.info("Day plan created: user_id=%s date=%s", user_id, day)
            return DayPlanUpdate(plan=plan, warnings=warnings)

        slots = list(plan.slots)
        position = _find_slot(slots, slot_index)
        if position is None:
            slots.append(slot)
        else:
            slots[position] = slot
        updated = self._with_slots(plan, slots, now)
        self.repository.update_day_plan(updated)
        _logger.info(
            "Day plan slot set: user_id=%s date=%s slot=%s", user_id, day, slot_index
        )
        return DayPlanUpdate(plan=updated, warnings=updated.warnings)

    def clear_slot(self, user_id: UUID, day: date, slot_index: int) -> DayPlanUpdate:
        """Remove a slot; the plan itself is deleted when no slots remain."""
        plan = self.repository.get_day_plan(user_id, day)
        if plan is None:
            return DayPlanUpdate(plan=None, warnings=[])
        slots = [slot for slot in plan.slots if slot.slot_index != slot_index]
        if not slots:
            self.repository.delete_day_plan(plan.id)
            _logger.info("Day plan deleted: user_id=%s date=%s", user_id, day)
            return DayPlanUpdate(plan=None, warnings=[])
        updated = self._with_slots(plan, slots, self.clock())
        self.repository.update_day_plan(updated)
        return DayPlanUpdate(plan=updated, warnings=updated.warnings)

    def copy_day(self, user_id: UUID, source: date, target: date) -> DayPlan:
        """Replace the target date's plan with a copy of the source plan."""
        source_plan = self.repository.get_day_plan(user_id, source)
        if source_plan is None:
            raise PreconditionFailedError(f"Source day has no plan: {source}")
        existing = self.repository.get_day_plan(user_id, target)
        if existing is not None:
            self.repository.delete_day_plan(existing.id)
        now = self.clock()
        copy = DayPlan(
            id=uuid4(),
            user_id=user_id,
            date=target,
            day_of_week=day_of_week(target),
            slots=list(source_plan.slots),
            totals=source_plan.totals,
            warnings=list(source_plan.warnings),
            status="planned",
            created_at=now,
            updated_at=now,
        )
        self.repository.create_day_plan(copy)
        _logger.info("Day plan copied: user_id=%s %s -> %s", user_id, source, target)
        return copy

    def mark_consumed(self, user_id: UUID, day: date) -> ConsumptionLogEntry:
        """Snapshot the day into the consumption log and mark it consumed.

        Repeated calls append further log entries.
        """
        plan = self.repository.get_day_plan(user_id, day)
        if plan is None:
            raise PreconditionFailedError(f"No plan for this day: {day}")
        if plan.status == "consumed":
            _logger.info("Re-logging consumed day: user_id=%s date=%s", user_id, day)
        entry = self.consumption_service.record(plan, self.configs.get_config(user_id))
        self.repository.update_day_plan(
            replace(
                plan,
                status="consumed",
                consumed_at=entry.consumed_at,
                updated_at=entry.consumed_at,
            )
        )
        return entry

    def _with_slots(
        self, plan: DayPlan, slots: list[DayPlanSlot], now: datetime
    ) -> DayPlan:
        totals, warnings = self._recompute(plan.user_id, slots)
        return replace(
            plan, slots=slots, totals=totals, warnings=warnings, updated_at=now
        )

    def _recompute(
        self, user_id: UUID, slots: list[DayPlanSlot]
    ) -> tuple[NutrientTotals, list[str]]:
        totals = sum_totals(slot.totals for slot in slots)
        return totals, validate_day(totals, self.configs.get_config(user_id))


def _find_slot(slots: list[DayPlanSlot], slot_index: int) -> int | None:
    for position, slot in enumerate(slots):
        if slot.slot_index == slot_index:
            return position
    return None
