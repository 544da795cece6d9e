"""Per-user nutrition targets, medical flags and scheduling policy."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

SCHEDULE_MODES = frozenset({"omad", "weekend_if", "custom"})

DEFAULT_CALORIC_CEILING = 1650.0
DEFAULT_PROTEIN_TARGET = 120.0
DEFAULT_FAT_TARGET = 120.0
DEFAULT_NET_CARB_LIMIT = 25.0
DEFAULT_SODIUM_DAILY_LIMIT = 2300.0
DEFAULT_POTASSIUM_DAILY_MINIMUM = 3500.0
DEFAULT_WEEKEND_MEAL_SLOTS = 2


@dataclass(frozen=True)
class NutritionTargets:
    """The four daily targets captured in consumption snapshots."""

    caloric_ceiling: float
    protein_target: float
    fat_target: float
    net_carb_limit: float


DEFAULT_TARGETS = NutritionTargets(
    caloric_ceiling=DEFAULT_CALORIC_CEILING,
    protein_target=DEFAULT_PROTEIN_TARGET,
    fat_target=DEFAULT_FAT_TARGET,
    net_carb_limit=DEFAULT_NET_CARB_LIMIT,
)


@dataclass(frozen=True)
class NutritionConfig:
    """Stored nutrition configuration for a user."""

    user_id: UUID
    caloric_ceiling: float = DEFAULT_CALORIC_CEILING
    protein_target: float = DEFAULT_PROTEIN_TARGET
    fat_target: float = DEFAULT_FAT_TARGET
    net_carb_limit: float = DEFAULT_NET_CARB_LIMIT
    renal_protection: bool = True
    hypertension_management: bool = True
    keto_protocol: bool = True
    sodium_daily_limit: float | None = DEFAULT_SODIUM_DAILY_LIMIT
    potassium_daily_minimum: float | None = DEFAULT_POTASSIUM_DAILY_MINIMUM
    schedule_mode: str = "omad"
    weekend_meal_slots: int | None = DEFAULT_WEEKEND_MEAL_SLOTS
    current_weight: float | None = None
    goal_weight: float | None = None
    id: UUID | None = None
    updated_at: datetime | None = None

    @property
    def targets(self) -> NutritionTargets:
        """Return the four daily targets."""
        return NutritionTargets(
            caloric_ceiling=self.caloric_ceiling,
            protein_target=self.protein_target,
            fat_target=self.fat_target,
            net_carb_limit=self.net_carb_limit,
        )


@dataclass(frozen=True)
class NutritionConfigUpdate:
    """Partial config update; ``None`` leaves a field untouched."""

    caloric_ceiling: float | None = None
    protein_target: float | None = None
    fat_target: float | None = None
    net_carb_limit: float | None = None
    renal_protection: bool | None = None
    hypertension_management: bool | None = None
    keto_protocol: bool | None = None
    sodium_daily_limit: float | None = None
    potassium_daily_minimum: float | None = None
    schedule_mode: str | None = None
    weekend_meal_slots: int | None = None
    current_weight: float | None = None
    goal_weight: float | None = None


@dataclass(frozen=True)
class EffectiveConfig:
    """Config to display: the stored one, or defaults when none exists."""

    config: NutritionConfig
    exists: bool


def resolve_targets(config: NutritionConfig | None) -> NutritionTargets:
    """Return the config's targets, substituting defaults when absent."""
    if config is None:
        return DEFAULT_TARGETS
    return config.targets
