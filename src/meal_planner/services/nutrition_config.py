"""Per-user nutrition configuration service."""

import logging
from dataclasses import dataclass, fields, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_planner.domain.errors import InvalidInputError, PreconditionFailedError
from meal_planner.domain.nutrition_config import (
    SCHEDULE_MODES,
    EffectiveConfig,
    NutritionConfig,
    NutritionConfigUpdate,
)
from meal_planner.domain.schedule import SlotSchedule
from meal_planner.services.schedule import resolve_slot_count

_logger = logging.getLogger(__name__)


class NutritionConfigRepository(Protocol):
    """Persistence interface for nutrition configs."""

    def get_config(self, user_id: UUID) -> NutritionConfig | None:
        """Return the user's config, if one was initialized."""

    def create_config(self, config: NutritionConfig) -> None:
        """Persist a new config."""

    def update_config(self, config: NutritionConfig) -> None:
        """Persist changes to a config."""


@dataclass
class NutritionConfigService:
    """Reads, initializes and updates the per-user config singleton."""

    repository: NutritionConfigRepository

    def get_config(self, user_id: UUID) -> NutritionConfig | None:
        """Return the stored config without defaults."""
        return self.repository.get_config(user_id)

    def get_effective(self, user_id: UUID) -> EffectiveConfig:
        """Return the stored config, or the defaults flagged as not existing."""
        config = self.repository.get_config(user_id)
        if config is None:
            defaults = NutritionConfig(user_id=user_id)
            return EffectiveConfig(config=defaults, exists=False)
        return EffectiveConfig(config=config, exists=True)

    def initialize(self, user_id: UUID) -> NutritionConfig:
        """Create the default config if none exists and return the stored one."""
        existing = self.repository.get_config(user_id)
        if existing is not None:
            return existing
        config = NutritionConfig(
            user_id=user_id, id=uuid4(), updated_at=datetime.now(tz=UTC)
        )
        self.repository.create_config(config)
        _logger.info("Nutrition config initialized: user_id=%s", user_id)
        return config

    def update(self, user_id: UUID, changes: NutritionConfigUpdate) -> NutritionConfig:
        """Apply a partial update to an initialized config."""
        config = self.repository.get_config(user_id)
        if config is None:
            raise PreconditionFailedError("Config not initialized")
        if changes.schedule_mode is not None and changes.schedule_mode not in (
            SCHEDULE_MODES
        ):
            raise InvalidInputError(f"Unknown schedule mode: {changes.schedule_mode}")
        if changes.weekend_meal_slots is not None and changes.weekend_meal_slots < 1:
            raise InvalidInputError("weekend_meal_slots must be at least 1")
        updates = {
            item.name: getattr(changes, item.name)
            for item in fields(changes)
            if getattr(changes, item.name) is not None
        }
        updated = replace(config, **updates, updated_at=datetime.now(tz=UTC))
        self.repository.update_config(updated)
        return updated

    def schedule_for(self, user_id: UUID, day: date) -> SlotSchedule:
        """Resolve the advisory slot count for a date."""
        return resolve_slot_count(day, self.repository.get_config(user_id))
