"""Supabase repository for nutrition configs."""

from dataclasses import asdict, dataclass
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import isoformat_or_none, parse_datetime
from meal_planner.domain.nutrition_config import NutritionConfig
from meal_planner.services.nutrition_config import NutritionConfigRepository

_OPTIONAL_FLOATS = (
    "sodium_daily_limit",
    "potassium_daily_minimum",
    "current_weight",
    "goal_weight",
)


@dataclass
class SupabaseNutritionConfigRepository(NutritionConfigRepository):
    """Supabase implementation for the per-user config singleton."""

    client: Client

    def get_config(self, user_id: UUID) -> NutritionConfig | None:
        """Return the user's config, if one was initialized."""
        response = (
            self.client.table("nutrition_config")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_config(response.data[0])

    def create_config(self, config: NutritionConfig) -> None:
        """Insert a config row."""
        response = (
            self.client.table("nutrition_config")
            .insert(_config_payload(config))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create nutrition config")

    def update_config(self, config: NutritionConfig) -> None:
        """Update a config row."""
        payload = _config_payload(config)
        payload.pop("id")
        response = (
            self.client.table("nutrition_config")
            .update(payload)
            .eq("user_id", str(config.user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update nutrition config")


def _config_payload(config: NutritionConfig) -> dict[str, object]:
    payload = asdict(config)
    payload["id"] = str(config.id) if config.id else None
    payload["user_id"] = str(config.user_id)
    payload["updated_at"] = isoformat_or_none(config.updated_at)
    return payload


def _parse_config(row: dict[str, object]) -> NutritionConfig:
    optional = {
        name: float(row[name]) if row.get(name) is not None else None
        for name in _OPTIONAL_FLOATS
    }
    weekend_slots = row.get("weekend_meal_slots")
    return NutritionConfig(
        id=UUID(str(row["id"])) if row.get("id") else None,
        user_id=UUID(str(row["user_id"])),
        caloric_ceiling=float(row.get("caloric_ceiling", 0.0)),
        protein_target=float(row.get("protein_target", 0.0)),
        fat_target=float(row.get("fat_target", 0.0)),
        net_carb_limit=float(row.get("net_carb_limit", 0.0)),
        renal_protection=bool(row.get("renal_protection", False)),
        hypertension_management=bool(row.get("hypertension_management", False)),
        keto_protocol=bool(row.get("keto_protocol", False)),
        schedule_mode=str(row.get("schedule_mode", "omad")),
        weekend_meal_slots=int(weekend_slots) if weekend_slots is not None else None,
        updated_at=parse_datetime(row.get("updated_at")),
        **optional,
    )
