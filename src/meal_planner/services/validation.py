"""Advisory validation of day totals against nutrition targets."""

from meal_planner.domain.nutrition import NutrientTotals, round_half_up
from meal_planner.domain.nutrition_config import NutritionConfig

PROTEIN_TOLERANCE = 0.9


def validate_day(totals: NutrientTotals, config: NutritionConfig | None) -> list[str]:
    """Return warnings in fixed rule order; empty when no config exists."""
    if config is None:
        return []

    warnings: list[str] = []
    net_carbs = totals.net_carbs

    if totals.calories > config.caloric_ceiling:
        warnings.append(
            f"Exceeds caloric limit ({round_half_up(totals.calories)}"
            f"/{_fmt(config.caloric_ceiling)} kcal)"
        )
    if totals.protein < config.protein_target * PROTEIN_TOLERANCE:
        warnings.append(
            f"Below protein minimum ({round_half_up(totals.protein)}"
            f"/{_fmt(config.protein_target)}g)"
        )
    if net_carbs > config.net_carb_limit:
        warnings.append(
            f"Exceeds net carb limit ({round_half_up(net_carbs)}"
            f"/{_fmt(config.net_carb_limit)}g)"
        )
    if (
        config.hypertension_management
        and config.sodium_daily_limit is not None
        and totals.sodium > config.sodium_daily_limit
    ):
        warnings.append(
            f"Exceeds sodium limit ({round_half_up(totals.sodium)}"
            f"/{_fmt(config.sodium_daily_limit)}mg)"
        )
    if (
        config.hypertension_management
        and config.potassium_daily_minimum is not None
        and totals.potassium < config.potassium_daily_minimum
    ):
        warnings.append(
            f"Below potassium minimum ({round_half_up(totals.potassium)}"
            f"/{_fmt(config.potassium_daily_minimum)}mg)"
        )
    return warnings


def _fmt(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.15g}"
