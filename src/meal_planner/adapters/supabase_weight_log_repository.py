"""Supabase repository for weight logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    isoformat_or_none,
    parse_date,
    parse_datetime,
)
from meal_planner.domain.weights import WeightLogEntry
from meal_planner.services.weights import WeightLogRepository


@dataclass
class SupabaseWeightLogRepository(WeightLogRepository):
    """Supabase implementation for weight logs."""

    client: Client

    def get_entry(self, entry_id: UUID) -> WeightLogEntry | None:
        """Return an entry by id, if present."""
        response = (
            self.client.table("weight_logs")
            .select("*")
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def get_entry_for_date(self, user_id: UUID, day: date) -> WeightLogEntry | None:
        """Return the user's entry for a date, if present."""
        response = (
            self.client.table("weight_logs")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_recent(self, user_id: UUID, limit: int) -> list[WeightLogEntry]:
        """Return the latest entries, newest first."""
        response = (
            self.client.table("weight_logs")
            .select("*")
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def create_entry(self, entry: WeightLogEntry) -> None:
        """Insert an entry row."""
        response = (
            self.client.table("weight_logs")
            .insert(
                {
                    "id": str(entry.id),
                    "user_id": str(entry.user_id),
                    "date": entry.date.isoformat(),
                    "weight": entry.weight,
                    "note": entry.note,
                    "created_at": isoformat_or_none(entry.created_at),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight log")

    def update_entry(self, entry: WeightLogEntry) -> None:
        """Update weight and note of an entry."""
        response = (
            self.client.table("weight_logs")
            .update({"weight": entry.weight, "note": entry.note})
            .eq("id", str(entry.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update weight log")

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""
        self.client.table("weight_logs").delete().eq("id", str(entry_id)).execute()


def _parse_entry(row: dict[str, object]) -> WeightLogEntry:
    return WeightLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_date(row["date"]),
        weight=float(row.get("weight", 0.0)),
        note=row.get("note"),
        created_at=parse_datetime(row.get("created_at")),
    )
