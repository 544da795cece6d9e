"""Tests for day plan assembly."""

from dataclasses import replace
from datetime import date
from uuid import uuid4

import pytest

from meal_planner.domain.errors import (
    InvalidInputError,
    PreconditionFailedError,
    ReferenceNotFoundError,
)
from meal_planner.domain.meals import (
    CustomComponent,
    Meal,
    MealComponent,
    MealUpdate,
)
from meal_planner.domain.nutrition import NutrientTotals, sum_totals
from meal_planner.domain.nutrition_config import NutritionConfig
from meal_planner.domain.plans import DayPlan
from tests.conftest import USER_ID, Planner

DAY = date(2026, 2, 7)


def _meal(planner: Planner, name: str, grams: float) -> Meal:
    beef = planner.ingredients.add(
        f"{name} beef", calories=250, protein=26, fat=15, sodium=72, potassium=318
    )
    return planner.meal_service.create_meal(
        USER_ID,
        name,
        [MealComponent(slot="protein", ingredient_id=beef.id, weight_grams=grams)],
    )


def _assert_totals_match_slots(plan: DayPlan) -> None:
    assert plan.totals == sum_totals(slot.totals for slot in plan.slots)


def test_set_slot_creates_plan(planner: Planner) -> None:
    meal = _meal(planner, "Steak", 300)

    update = planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=meal.id)

    assert update.plan is not None
    assert update.plan.date == DAY
    assert update.plan.day_of_week == 6
    assert update.plan.status == "planned"
    assert update.plan.slots[0].meal_id == meal.id
    assert update.plan.totals == meal.totals
    assert planner.plans.get_day_plan(USER_ID, DAY) == update.plan


def test_set_slot_replaces_same_index_and_appends_new(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    burger = _meal(planner, "Burger", 200)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)

    replaced = planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=burger.id)
    assert replaced.plan is not None
    assert [slot.meal_id for slot in replaced.plan.slots] == [burger.id]

    appended = planner.day_plan_service.set_slot(USER_ID, DAY, 1, meal_id=steak.id)
    assert appended.plan is not None
    assert [slot.slot_index for slot in appended.plan.slots] == [0, 1]
    assert appended.plan.id == replaced.plan.id
    _assert_totals_match_slots(appended.plan)


def test_set_slot_with_custom_components(planner: Planner) -> None:
    egg = planner.ingredients.add("Egg", calories=143, protein=12.6, fat=9.5)

    update = planner.day_plan_service.set_slot(
        USER_ID,
        DAY,
        0,
        custom_components=[CustomComponent(ingredient_id=egg.id, weight_grams=200)],
    )

    assert update.plan is not None
    assert update.plan.slots[0].meal_id is None
    assert update.plan.slots[0].totals == NutrientTotals(
        calories=286, protein=25.2, fat=19
    )


def test_meal_totals_are_copied_not_linked(planner: Planner) -> None:
    meal = _meal(planner, "Steak", 300)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=meal.id)
    beef_id = meal.components[0].ingredient_id
    beef = planner.ingredients.ingredients[beef_id]
    planner.ingredients.ingredients[beef_id] = replace(
        beef, per_100g=NutrientTotals(calories=1000)
    )
    refreshed = planner.meal_service.update_meal(
        USER_ID, meal.id, MealUpdate(components=meal.components)
    )
    update = planner.day_plan_service.set_slot(
        USER_ID,
        DAY,
        1,
        custom_components=[CustomComponent(ingredient_id=beef_id, weight_grams=10)],
    )

    assert refreshed.totals.calories == 3000.0
    assert update.plan is not None
    assert update.plan.slots[0].totals == meal.totals
    assert update.plan.totals.calories == meal.totals.calories + 100.0


def test_set_slot_rejects_invalid_requests(planner: Planner) -> None:
    meal = _meal(planner, "Steak", 300)

    with pytest.raises(InvalidInputError):
        planner.day_plan_service.set_slot(USER_ID, DAY, -1, meal_id=meal.id)
    with pytest.raises(InvalidInputError):
        planner.day_plan_service.set_slot(USER_ID, DAY, 0)
    with pytest.raises(InvalidInputError):
        planner.day_plan_service.set_slot(
            USER_ID, DAY, 0, meal_id=meal.id, custom_components=[]
        )
    with pytest.raises(ReferenceNotFoundError):
        planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=uuid4())
    assert planner.plans.get_day_plan(USER_ID, DAY) is None


def test_set_slot_rejects_non_positive_custom_weight(planner: Planner) -> None:
    beef = planner.ingredients.add("Ground Beef", calories=250, protein=26)

    for grams in (-200, 0):
        with pytest.raises(InvalidInputError):
            planner.day_plan_service.set_slot(
                USER_ID,
                DAY,
                0,
                custom_components=[
                    CustomComponent(ingredient_id=beef.id, weight_grams=grams)
                ],
            )

    assert planner.plans.get_day_plan(USER_ID, DAY) is None


def test_set_slot_validates_against_config(planner: Planner) -> None:
    planner.configs.create_config(
        NutritionConfig(
            user_id=USER_ID,
            caloric_ceiling=1650,
            protein_target=120,
            hypertension_management=False,
        )
    )
    small = _meal(planner, "Small steak", 100)

    update = planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=small.id)

    assert update.warnings == ["Below protein minimum (26/120g)"]
    assert update.plan is not None
    assert update.plan.warnings == update.warnings


def test_set_slot_without_config_has_no_warnings(planner: Planner) -> None:
    huge = _meal(planner, "Huge steak", 2000)

    update = planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=huge.id)

    assert update.warnings == []


def test_clear_slot_recomputes_and_deletes_empty_plan(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    burger = _meal(planner, "Burger", 200)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)
    first = planner.day_plan_service.set_slot(USER_ID, DAY, 1, meal_id=burger.id)
    assert first.plan is not None

    remaining = planner.day_plan_service.clear_slot(USER_ID, DAY, 0)
    assert remaining.plan is not None
    assert remaining.plan.totals == burger.totals
    _assert_totals_match_slots(remaining.plan)

    emptied = planner.day_plan_service.clear_slot(USER_ID, DAY, 1)
    assert emptied.plan is None
    assert emptied.warnings == []
    assert planner.plans.get_day_plan(USER_ID, DAY) is None

    recreated = planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)
    assert recreated.plan is not None
    assert recreated.plan.id != first.plan.id
    assert recreated.plan.status == "planned"


def test_clear_slot_without_plan(planner: Planner) -> None:
    update = planner.day_plan_service.clear_slot(USER_ID, DAY, 0)

    assert update.plan is None
    assert update.warnings == []


def test_copy_day_overwrites_target_and_resets_status(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    burger = _meal(planner, "Burger", 200)
    target = date(2026, 2, 9)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)
    planner.day_plan_service.mark_consumed(USER_ID, DAY)
    old_target = planner.day_plan_service.set_slot(
        USER_ID, target, 0, meal_id=burger.id
    )
    assert old_target.plan is not None

    copy = planner.day_plan_service.copy_day(USER_ID, DAY, target)

    source = planner.plans.get_day_plan(USER_ID, DAY)
    assert source is not None
    assert copy.id not in {source.id, old_target.plan.id}
    assert copy.date == target
    assert copy.day_of_week == 1
    assert copy.status == "planned"
    assert copy.consumed_at is None
    assert copy.slots == source.slots
    assert copy.totals == source.totals
    assert old_target.plan.id in planner.plans.deleted
    assert planner.plans.get_day_plan(USER_ID, target) == copy


def test_copy_day_requires_source(planner: Planner) -> None:
    with pytest.raises(PreconditionFailedError):
        planner.day_plan_service.copy_day(USER_ID, DAY, date(2026, 2, 9))


def test_mark_consumed_requires_plan(planner: Planner) -> None:
    with pytest.raises(PreconditionFailedError):
        planner.day_plan_service.mark_consumed(USER_ID, DAY)
    assert planner.consumption_log.entries == []


def test_mark_consumed_updates_status_and_logs(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)

    entry = planner.day_plan_service.mark_consumed(USER_ID, DAY)

    stored = planner.plans.get_day_plan(USER_ID, DAY)
    assert stored is not None
    assert stored.status == "consumed"
    assert stored.consumed_at == entry.consumed_at
    assert entry.day_plan_id == stored.id
    assert entry.snapshot.totals == stored.totals


def test_mark_consumed_twice_appends_entries(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)

    first = planner.day_plan_service.mark_consumed(USER_ID, DAY)
    planner.clock.advance(3600)
    second = planner.day_plan_service.mark_consumed(USER_ID, DAY)

    stored = planner.plans.get_day_plan(USER_ID, DAY)
    assert planner.consumption_log.entries == [first, second]
    assert first.id != second.id
    assert stored is not None
    assert stored.consumed_at == second.consumed_at


def test_get_day_enriches_meal_names(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    egg = planner.ingredients.add("Egg", calories=143)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)
    planner.day_plan_service.set_slot(
        USER_ID,
        DAY,
        1,
        custom_components=[CustomComponent(ingredient_id=egg.id, weight_grams=50)],
    )

    view = planner.day_plan_service.get_day(USER_ID, DAY)

    assert view is not None
    assert [slot.meal_name for slot in view.slots] == ["Steak", None]
    assert planner.day_plan_service.get_day(USER_ID, date(2026, 2, 8)) is None


def test_get_week_fills_missing_days(planner: Planner) -> None:
    steak = _meal(planner, "Steak", 300)
    planner.day_plan_service.set_slot(USER_ID, DAY, 0, meal_id=steak.id)

    week = planner.day_plan_service.get_week(USER_ID, date(2026, 2, 2))

    assert len(week) == 7
    assert [day.day_of_week for day in week] == [1, 2, 3, 4, 5, 6, 0]
    assert [day.plan is not None for day in week] == [
        False,
        False,
        False,
        False,
        False,
        True,
        False,
    ]
