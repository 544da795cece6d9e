"""Meal slot scheduling and calendar helpers."""

from datetime import date, timedelta

from meal_planner.domain.nutrition_config import (
    DEFAULT_WEEKEND_MEAL_SLOTS,
    NutritionConfig,
)
from meal_planner.domain.schedule import SlotSchedule

_SUNDAY = 0
_SATURDAY = 6


def day_of_week(day: date) -> int:
    """Return the day index with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def resolve_slot_count(day: date, config: NutritionConfig | None) -> SlotSchedule:
    """Return the advisory slot count for ``day`` under the config's schedule.

    A missing config gives weekends two slots and weekdays one. omad is always
    one slot; weekend_if gives weekend days ``weekend_meal_slots`` (default 2);
    custom applies ``weekend_meal_slots`` (default 1) to every day.
    """
    dow = day_of_week(day)
    is_weekend = dow in {_SUNDAY, _SATURDAY}
    if config is None:
        slot_count = DEFAULT_WEEKEND_MEAL_SLOTS if is_weekend else 1
    elif config.schedule_mode == "omad":
        slot_count = 1
    elif config.schedule_mode == "weekend_if":
        slot_count = (
            (config.weekend_meal_slots or DEFAULT_WEEKEND_MEAL_SLOTS)
            if is_weekend
            else 1
        )
    else:
        slot_count = config.weekend_meal_slots or 1
    return SlotSchedule(slot_count=slot_count, is_weekend=is_weekend, day_of_week=dow)


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_dates(start: date) -> list[date]:
    """Return the seven dates beginning at ``start``."""
    return [start + timedelta(days=offset) for offset in range(7)]
