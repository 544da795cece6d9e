"""Row conversion helpers shared by Supabase repositories."""

from datetime import date, datetime

from meal_planner.domain.nutrition import NUTRIENT_FIELDS, NutrientTotals


def totals_payload(totals: NutrientTotals, prefix: str = "") -> dict[str, float]:
    """Return nutrient columns for a row, each named ``<prefix><field>``."""
    return {f"{prefix}{name}": getattr(totals, name) for name in NUTRIENT_FIELDS}


def parse_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_date(value: object) -> date:
    """Parse an ISO calendar date column."""
    return date.fromisoformat(str(value)[:10])


def isoformat_or_none(value: datetime | None) -> str | None:
    """Serialize an optional timestamp."""
    return value.isoformat() if value else None
