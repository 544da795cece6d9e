"""Nutrient value objects shared across the planner."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal

NUTRIENT_FIELDS = (
    "calories",
    "protein",
    "fat",
    "carbs",
    "fiber",
    "sodium",
    "potassium",
)

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class NutrientTotals:
    """Seven-field nutrient profile.

    Used both as a per-100g ingredient density and as an absolute amount for
    a component, slot, meal or day. Sodium and potassium are in milligrams,
    everything else in kcal or grams.
    """

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0

    @property
    def net_carbs(self) -> float:
        """Carbohydrates minus fiber."""
        return self.carbs - self.fiber

    def scaled(self, factor: float) -> "NutrientTotals":
        """Return every field multiplied by ``factor``."""
        return NutrientTotals(
            **{name: getattr(self, name) * factor for name in NUTRIENT_FIELDS}
        )

    @classmethod
    def from_mapping(
        cls, row: Mapping[str, object], prefix: str = ""
    ) -> "NutrientTotals":
        """Build totals from a mapping, reading ``<prefix><field>`` keys."""
        return cls(
            **{
                field.name: float(row.get(f"{prefix}{field.name}") or 0.0)
                for field in fields(cls)
            }
        )


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal using the printed value, not the binary one."""
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round half-up to the nearest integer."""
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def sum_totals(items: Iterable[NutrientTotals]) -> NutrientTotals:
    """Field-wise sum, independent of input order."""
    materialized = list(items)
    return NutrientTotals(
        **{
            name: round_one_decimal(
                math.fsum(getattr(item, name) for item in materialized)
            )
            for name in NUTRIENT_FIELDS
        }
    )
