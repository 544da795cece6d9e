"""Body weight log service."""

from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.errors import ReferenceNotFoundError
from meal_planner.domain.weights import WeightLogEntry


class WeightLogRepository(Protocol):
    """Persistence interface for weight logs."""

    def get_entry(self, entry_id: UUID) -> WeightLogEntry | None:
        """Return an entry by id, if present."""

    def get_entry_for_date(self, user_id: UUID, day: date) -> WeightLogEntry | None:
        """Return the user's entry for a date, if present."""

    def list_recent(self, user_id: UUID, limit: int) -> list[WeightLogEntry]:
        """Return the latest entries, newest first."""

    def create_entry(self, entry: WeightLogEntry) -> None:
        """Persist a new entry."""

    def update_entry(self, entry: WeightLogEntry) -> None:
        """Persist changes to an entry."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class WeightLogService:
    """One weight entry per user and date."""

    repository: WeightLogRepository

    def log(
        self, user_id: UUID, day: date, weight: float, note: str | None = None
    ) -> WeightLogEntry:
        """Record a weight, replacing the weight and note of an existing entry."""
        existing = self.repository.get_entry_for_date(user_id, day)
        if existing is not None:
            updated = replace(existing, weight=weight, note=note)
            self.repository.update_entry(updated)
            return updated
        entry = WeightLogEntry(
            id=uuid4(),
            user_id=user_id,
            date=day,
            weight=weight,
            note=note,
            created_at=datetime.now(tz=UTC),
        )
        self.repository.create_entry(entry)
        return entry

    def recent(self, user_id: UUID, limit: int = 30) -> list[WeightLogEntry]:
        """Return the latest entries in date order for charting."""
        entries = self.repository.list_recent(user_id, limit)
        return sorted(entries, key=lambda entry: entry.date)

    def latest(self, user_id: UUID) -> WeightLogEntry | None:
        """Return the most recent entry."""
        entries = self.repository.list_recent(user_id, 1)
        return entries[0] if entries else None

    def remove(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user."""
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            raise ReferenceNotFoundError("Weight log", entry_id)
        self.repository.delete_entry(entry_id)
