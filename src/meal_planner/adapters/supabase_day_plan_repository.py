"""Supabase repository for day plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    isoformat_or_none,
    parse_date,
    parse_datetime,
    totals_payload,
)
from meal_planner.domain.meals import CustomComponent
from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.domain.plans import DayPlan, DayPlanSlot
from meal_planner.services.plans import DayPlanRepository


@dataclass
class SupabaseDayPlanRepository(DayPlanRepository):
    """Supabase implementation for day plans; slots are stored as JSON."""

    client: Client

    def get_day_plan(self, user_id: UUID, day: date) -> DayPlan | None:
        """Return the user's plan for a date, if present."""
        response = (
            self.client.table("meal_plans")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_day_plans(self, user_id: UUID, start: date, end: date) -> list[DayPlan]:
        """Return plans dated within ``[start, end]``."""
        response = (
            self.client.table("meal_plans")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def create_day_plan(self, plan: DayPlan) -> None:
        """Insert a plan row."""
        response = (
            self.client.table("meal_plans").insert(_plan_payload(plan)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create day plan")

    def update_day_plan(self, plan: DayPlan) -> None:
        """Update slots, totals, warnings and status in a single write."""
        payload = _plan_payload(plan)
        for key in ("id", "user_id", "date", "created_at"):
            payload.pop(key)
        response = (
            self.client.table("meal_plans")
            .update(payload)
            .eq("id", str(plan.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update day plan")

    def delete_day_plan(self, plan_id: UUID) -> None:
        """Delete a plan row."""
        self.client.table("meal_plans").delete().eq("id", str(plan_id)).execute()


def _plan_payload(plan: DayPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "user_id": str(plan.user_id),
        "date": plan.date.isoformat(),
        "day_of_week": plan.day_of_week,
        "slots": [_slot_payload(slot) for slot in plan.slots],
        **totals_payload(plan.totals, prefix="total_"),
        "warnings": list(plan.warnings),
        "status": plan.status,
        "consumed_at": isoformat_or_none(plan.consumed_at),
        "notes": plan.notes,
        "created_at": isoformat_or_none(plan.created_at),
        "updated_at": isoformat_or_none(plan.updated_at),
    }


def _slot_payload(slot: DayPlanSlot) -> dict[str, object]:
    custom = None
    if slot.custom_components is not None:
        custom = [
            {
                "ingredient_id": str(component.ingredient_id),
                "weight_grams": component.weight_grams,
                "preparation_method": component.preparation_method,
            }
            for component in slot.custom_components
        ]
    return {
        "slot_index": slot.slot_index,
        "meal_id": str(slot.meal_id) if slot.meal_id else None,
        "custom_components": custom,
        **totals_payload(slot.totals),
    }


def _parse_slot(row: dict[str, object]) -> DayPlanSlot:
    raw_custom = row.get("custom_components")
    custom = None
    if raw_custom is not None:
        custom = [
            CustomComponent(
                ingredient_id=UUID(str(item["ingredient_id"])),
                weight_grams=float(item.get("weight_grams", 0.0)),
                preparation_method=item.get("preparation_method"),
            )
            for item in raw_custom
        ]
    meal_id = row.get("meal_id")
    return DayPlanSlot(
        slot_index=int(row.get("slot_index", 0)),
        totals=NutrientTotals.from_mapping(row),
        meal_id=UUID(str(meal_id)) if meal_id else None,
        custom_components=custom,
    )


def _parse_plan(row: dict[str, object]) -> DayPlan:
    """Parse a plan row into a domain model."""
    return DayPlan(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_date(row["date"]),
        day_of_week=int(row.get("day_of_week", 0)),
        slots=[_parse_slot(slot) for slot in row.get("slots") or []],
        totals=NutrientTotals.from_mapping(row, prefix="total_"),
        warnings=list(row.get("warnings") or []),
        status=str(row.get("status", "planned")),
        consumed_at=parse_datetime(row.get("consumed_at")),
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
