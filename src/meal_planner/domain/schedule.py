"""Schedule resolution results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SlotSchedule:
    """Advisory number of meal slots for a calendar date.

    ``day_of_week`` counts from Sunday (0) to Saturday (6).
    """

    slot_count: int
    is_weekend: bool
    day_of_week: int
