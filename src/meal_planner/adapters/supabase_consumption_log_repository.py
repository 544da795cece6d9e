"""Supabase repository for the consumption log."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import parse_date, totals_payload
from meal_planner.domain.consumption import (
    ComponentBreakdown,
    ConsumptionLogEntry,
    ConsumptionSnapshot,
)
from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.domain.nutrition_config import NutritionTargets
from meal_planner.services.consumption import ConsumptionLogRepository


@dataclass
class SupabaseConsumptionLogRepository(ConsumptionLogRepository):
    """Append-only Supabase consumption log."""

    client: Client

    def create_entry(self, entry: ConsumptionLogEntry) -> None:
        """Insert a log row."""
        response = (
            self.client.table("consumption_log")
            .insert(
                {
                    "id": str(entry.id),
                    "user_id": str(entry.user_id),
                    "meal_plan_id": str(entry.day_plan_id),
                    "date": entry.date.isoformat(),
                    "snapshot": {
                        **totals_payload(entry.snapshot.totals),
                        "components": [
                            {
                                "ingredient_name": item.ingredient_name,
                                "weight_grams": item.weight_grams,
                                "calories": item.calories,
                                "protein": item.protein,
                                "fat": item.fat,
                                "carbs": item.carbs,
                            }
                            for item in entry.snapshot.components
                        ],
                    },
                    "config_snapshot": {
                        "caloric_ceiling": entry.config_snapshot.caloric_ceiling,
                        "protein_target": entry.config_snapshot.protein_target,
                        "fat_target": entry.config_snapshot.fat_target,
                        "net_carb_limit": entry.config_snapshot.net_carb_limit,
                    },
                    "consumed_at": entry.consumed_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create consumption log entry")

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[ConsumptionLogEntry]:
        """Return entries dated within ``[start, end]``."""
        response = (
            self.client.table("consumption_log")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("consumed_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> ConsumptionLogEntry:
    snapshot = row.get("snapshot") or {}
    config = row.get("config_snapshot") or {}
    return ConsumptionLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day_plan_id=UUID(str(row["meal_plan_id"])),
        date=parse_date(row["date"]),
        snapshot=ConsumptionSnapshot(
            totals=NutrientTotals.from_mapping(snapshot),
            components=[
                ComponentBreakdown(
                    ingredient_name=str(item.get("ingredient_name", "")),
                    weight_grams=float(item.get("weight_grams", 0.0)),
                    calories=float(item.get("calories", 0.0)),
                    protein=float(item.get("protein", 0.0)),
                    fat=float(item.get("fat", 0.0)),
                    carbs=float(item.get("carbs", 0.0)),
                )
                for item in snapshot.get("components") or []
            ],
        ),
        config_snapshot=NutritionTargets(
            caloric_ceiling=float(config.get("caloric_ceiling", 0.0)),
            protein_target=float(config.get("protein_target", 0.0)),
            fat_target=float(config.get("fat_target", 0.0)),
            net_carb_limit=float(config.get("net_carb_limit", 0.0)),
        ),
        consumed_at=datetime.fromisoformat(str(row["consumed_at"])),
    )
