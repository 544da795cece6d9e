"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.supabase_consumption_log_repository import (
    SupabaseConsumptionLogRepository,
)
from meal_planner.adapters.supabase_day_plan_repository import (
    SupabaseDayPlanRepository,
)
from meal_planner.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from meal_planner.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_planner.adapters.supabase_nutrition_config_repository import (
    SupabaseNutritionConfigRepository,
)
from meal_planner.adapters.supabase_shopping_list_repository import (
    SupabaseShoppingListRepository,
)
from meal_planner.adapters.supabase_weight_log_repository import (
    SupabaseWeightLogRepository,
)
from meal_planner.config import Settings
from meal_planner.services.consumption import ConsumptionService
from meal_planner.services.ingredients import IngredientService
from meal_planner.services.meals import MealService
from meal_planner.services.nutrition_config import NutritionConfigService
from meal_planner.services.plans import DayPlanService
from meal_planner.services.shopping import ShoppingListService
from meal_planner.services.weights import WeightLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ingredient_service: IngredientService
    meal_service: MealService
    nutrition_config_service: NutritionConfigService
    day_plan_service: DayPlanService
    consumption_service: ConsumptionService
    shopping_list_service: ShoppingListService
    weight_log_service: WeightLogService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    ingredient_repository = SupabaseIngredientRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    config_repository = SupabaseNutritionConfigRepository(supabase_client)
    day_plan_repository = SupabaseDayPlanRepository(supabase_client)
    consumption_repository = SupabaseConsumptionLogRepository(supabase_client)
    shopping_repository = SupabaseShoppingListRepository(supabase_client)
    weight_repository = SupabaseWeightLogRepository(supabase_client)

    ingredient_service = IngredientService(ingredient_repository)
    meal_service = MealService(
        repository=meal_repository, ingredients=ingredient_repository
    )
    consumption_service = ConsumptionService(
        repository=consumption_repository,
        meals=meal_repository,
        ingredients=ingredient_repository,
    )
    day_plan_service = DayPlanService(
        repository=day_plan_repository,
        meal_service=meal_service,
        ingredients=ingredient_repository,
        configs=config_repository,
        consumption_service=consumption_service,
    )
    shopping_list_service = ShoppingListService(
        repository=shopping_repository,
        day_plans=day_plan_repository,
        meals=meal_repository,
        ingredients=ingredient_repository,
    )

    return AppContainer(
        settings=resolved_settings,
        ingredient_service=ingredient_service,
        meal_service=meal_service,
        nutrition_config_service=NutritionConfigService(config_repository),
        day_plan_service=day_plan_service,
        consumption_service=consumption_service,
        shopping_list_service=shopping_list_service,
        weight_log_service=WeightLogService(weight_repository),
    )
