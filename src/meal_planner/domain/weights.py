"""Domain models for body weight tracking."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class WeightLogEntry:
    """Body weight in kilograms recorded for a date."""

    id: UUID
    user_id: UUID
    date: date
    weight: float
    note: str | None = None
    created_at: datetime | None = None
