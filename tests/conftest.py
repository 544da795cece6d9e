"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from meal_planner.config import Settings
from meal_planner.containers import AppContainer
from meal_planner.domain.consumption import ConsumptionLogEntry
from meal_planner.domain.ingredients import Ingredient
from meal_planner.domain.meals import Meal
from meal_planner.domain.nutrition import NutrientTotals
from meal_planner.domain.nutrition_config import NutritionConfig
from meal_planner.domain.plans import DayPlan
from meal_planner.domain.shopping import ShoppingList
from meal_planner.domain.weights import WeightLogEntry
from meal_planner.services.consumption import (
    ConsumptionLogRepository,
    ConsumptionService,
)
from meal_planner.services.ingredients import IngredientRepository, IngredientService
from meal_planner.services.meals import MealRepository, MealService
from meal_planner.services.nutrition_config import (
    NutritionConfigRepository,
    NutritionConfigService,
)
from meal_planner.services.plans import DayPlanRepository, DayPlanService
from meal_planner.services.shopping import (
    ShoppingListRepository,
    ShoppingListService,
)
from meal_planner.services.weights import WeightLogRepository, WeightLogService

USER_ID = UUID("00000000-0000-0000-0000-000000000001")


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory ingredient catalog for tests."""

    ingredients: dict[UUID, Ingredient] = field(default_factory=dict)

    def add(  # noqa: PLR0913
        self,
        name: str,
        category: str = "protein",
        *,
        calories: float = 0.0,
        protein: float = 0.0,
        fat: float = 0.0,
        carbs: float = 0.0,
        fiber: float = 0.0,
        sodium: float = 0.0,
        potassium: float = 0.0,
        is_pantry_essential: bool = False,
        user_id: UUID = USER_ID,
    ) -> Ingredient:
        ingredient = Ingredient(
            id=uuid4(),
            user_id=user_id,
            name=name,
            category=category,
            per_100g=NutrientTotals(
                calories=calories,
                protein=protein,
                fat=fat,
                carbs=carbs,
                fiber=fiber,
                sodium=sodium,
                potassium=potassium,
            ),
            is_pantry_essential=is_pantry_essential,
        )
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def list_ingredients(
        self, user_id: UUID, category: str | None = None
    ) -> list[Ingredient]:
        return [
            item
            for item in self.ingredients.values()
            if item.user_id == user_id
            and (category is None or item.category == category)
        ]

    def create_ingredient(self, ingredient: Ingredient) -> None:
        self.ingredients[ingredient.id] = ingredient

    def update_ingredient(self, ingredient: Ingredient) -> None:
        self.ingredients[ingredient.id] = ingredient

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        self.ingredients.pop(ingredient_id, None)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def list_meals(self, user_id: UUID, favorites_only: bool = False) -> list[Meal]:
        return [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id and (meal.is_favorite or not favorites_only)
        ]

    def create_meal(self, meal: Meal) -> None:
        self.meals[meal.id] = meal

    def update_meal(self, meal: Meal) -> None:
        self.meals[meal.id] = meal

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class InMemoryNutritionConfigRepository(NutritionConfigRepository):
    """In-memory config repository for tests."""

    configs: dict[UUID, NutritionConfig] = field(default_factory=dict)

    def get_config(self, user_id: UUID) -> NutritionConfig | None:
        return self.configs.get(user_id)

    def create_config(self, config: NutritionConfig) -> None:
        self.configs[config.user_id] = config

    def update_config(self, config: NutritionConfig) -> None:
        self.configs[config.user_id] = config


@dataclass
class InMemoryDayPlanRepository(DayPlanRepository):
    """In-memory day plan repository for tests."""

    plans: dict[UUID, DayPlan] = field(default_factory=dict)
    deleted: list[UUID] = field(default_factory=list)

    def get_day_plan(self, user_id: UUID, day: date) -> DayPlan | None:
        for plan in self.plans.values():
            if plan.user_id == user_id and plan.date == day:
                return plan
        return None

    def list_day_plans(self, user_id: UUID, start: date, end: date) -> list[DayPlan]:
        return sorted(
            (
                plan
                for plan in self.plans.values()
                if plan.user_id == user_id and start <= plan.date <= end
            ),
            key=lambda plan: plan.date,
        )

    def create_day_plan(self, plan: DayPlan) -> None:
        self.plans[plan.id] = plan

    def update_day_plan(self, plan: DayPlan) -> None:
        self.plans[plan.id] = plan

    def delete_day_plan(self, plan_id: UUID) -> None:
        self.plans.pop(plan_id, None)
        self.deleted.append(plan_id)


@dataclass
class InMemoryConsumptionLogRepository(ConsumptionLogRepository):
    """In-memory consumption log for tests."""

    entries: list[ConsumptionLogEntry] = field(default_factory=list)

    def create_entry(self, entry: ConsumptionLogEntry) -> None:
        self.entries.append(entry)

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[ConsumptionLogEntry]:
        return [
            entry
            for entry in self.entries
            if entry.user_id == user_id and start <= entry.date <= end
        ]


@dataclass
class InMemoryShoppingListRepository(ShoppingListRepository):
    """In-memory shopping list repository for tests."""

    lists: dict[UUID, ShoppingList] = field(default_factory=dict)

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        return self.lists.get(list_id)

    def get_list_for_week(self, user_id: UUID, week_start: date) -> ShoppingList | None:
        for shopping_list in self.lists.values():
            if (
                shopping_list.user_id == user_id
                and shopping_list.week_start == week_start
            ):
                return shopping_list
        return None

    def create_list(self, shopping_list: ShoppingList) -> None:
        self.lists[shopping_list.id] = shopping_list

    def update_list(self, shopping_list: ShoppingList) -> None:
        self.lists[shopping_list.id] = shopping_list


@dataclass
class InMemoryWeightLogRepository(WeightLogRepository):
    """In-memory weight log repository for tests."""

    entries: dict[UUID, WeightLogEntry] = field(default_factory=dict)

    def get_entry(self, entry_id: UUID) -> WeightLogEntry | None:
        return self.entries.get(entry_id)

    def get_entry_for_date(self, user_id: UUID, day: date) -> WeightLogEntry | None:
        for entry in self.entries.values():
            if entry.user_id == user_id and entry.date == day:
                return entry
        return None

    def list_recent(self, user_id: UUID, limit: int) -> list[WeightLogEntry]:
        entries = [entry for entry in self.entries.values() if entry.user_id == user_id]
        return sorted(entries, key=lambda entry: entry.date, reverse=True)[:limit]

    def create_entry(self, entry: WeightLogEntry) -> None:
        self.entries[entry.id] = entry

    def update_entry(self, entry: WeightLogEntry) -> None:
        self.entries[entry.id] = entry

    def delete_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)


@dataclass
class FixedClock:
    """Clock returning a controllable instant."""

    now: datetime = field(
        default_factory=lambda: datetime(2026, 2, 3, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@dataclass
class Planner:
    """Services wired over in-memory repositories."""

    ingredients: InMemoryIngredientRepository
    meals: InMemoryMealRepository
    configs: InMemoryNutritionConfigRepository
    plans: InMemoryDayPlanRepository
    consumption_log: InMemoryConsumptionLogRepository
    shopping_lists: InMemoryShoppingListRepository
    clock: FixedClock
    meal_service: MealService
    consumption_service: ConsumptionService
    day_plan_service: DayPlanService
    shopping_list_service: ShoppingListService
    nutrition_config_service: NutritionConfigService


def build_planner() -> Planner:
    ingredients = InMemoryIngredientRepository()
    meals = InMemoryMealRepository()
    configs = InMemoryNutritionConfigRepository()
    plans = InMemoryDayPlanRepository()
    consumption_log = InMemoryConsumptionLogRepository()
    shopping_lists = InMemoryShoppingListRepository()
    clock = FixedClock()
    meal_service = MealService(repository=meals, ingredients=ingredients, clock=clock)
    consumption_service = ConsumptionService(
        repository=consumption_log,
        meals=meals,
        ingredients=ingredients,
        clock=clock,
    )
    day_plan_service = DayPlanService(
        repository=plans,
        meal_service=meal_service,
        ingredients=ingredients,
        configs=configs,
        consumption_service=consumption_service,
        clock=clock,
    )
    shopping_list_service = ShoppingListService(
        repository=shopping_lists,
        day_plans=plans,
        meals=meals,
        ingredients=ingredients,
        clock=clock,
    )
    return Planner(
        ingredients=ingredients,
        meals=meals,
        configs=configs,
        plans=plans,
        consumption_log=consumption_log,
        shopping_lists=shopping_lists,
        clock=clock,
        meal_service=meal_service,
        consumption_service=consumption_service,
        day_plan_service=day_plan_service,
        shopping_list_service=shopping_list_service,
        nutrition_config_service=NutritionConfigService(configs),
    )


@pytest.fixture
def planner() -> Planner:
    return build_planner()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def container(settings: Settings, planner: Planner) -> AppContainer:
    return AppContainer(
        settings=settings,
        ingredient_service=IngredientService(planner.ingredients),
        meal_service=planner.meal_service,
        nutrition_config_service=planner.nutrition_config_service,
        day_plan_service=planner.day_plan_service,
        consumption_service=planner.consumption_service,
        shopping_list_service=planner.shopping_list_service,
        weight_log_service=WeightLogService(InMemoryWeightLogRepository()),
    )
