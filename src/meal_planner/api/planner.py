"""Planner API endpoints."""

from __future__ import annotations

from datetime import date, timedelta  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, Request

from meal_planner.api.models import (  # noqa: TC001
    CopyDayRequest,
    ShoppingListRequest,
    SlotAssignment,
    TotalsPreviewRequest,
)
from meal_planner.services.schedule import week_start

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(tags=["planner"])


async def current_user_id(x_user_id: UUID = Header()) -> UUID:
    """Return the caller's user id; authentication happens upstream."""
    return x_user_id


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/totals/preview")
async def preview_totals(
    body: TotalsPreviewRequest, request: Request
) -> dict[str, object]:
    """Compute totals for unsaved components."""
    components = [component.to_domain() for component in body.components]
    totals = _container(request).meal_service.preview_totals(components)
    return {"totals": totals}


@router.get("/schedule/{day}")
async def schedule_for_day(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the advisory slot count for a date."""
    schedule = _container(request).nutrition_config_service.schedule_for(user_id, day)
    return {"schedule": schedule}


@router.get("/days/{day}")
async def get_day(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the plan for a date, or null."""
    return {"day": _container(request).day_plan_service.get_day(user_id, day)}


@router.get("/weeks/{day}")
async def get_week(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the Monday-to-Sunday week containing a date."""
    start = week_start(day)
    return {"week": _container(request).day_plan_service.get_week(user_id, start)}


@router.put("/days/{day}/slots/{slot_index}")
async def set_slot(
    day: date,
    slot_index: int,
    body: SlotAssignment,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Assign a meal or inline components to a slot."""
    custom = (
        [component.to_domain() for component in body.custom_components]
        if body.custom_components is not None
        else None
    )
    update = _container(request).day_plan_service.set_slot(
        user_id, day, slot_index, meal_id=body.meal_id, custom_components=custom
    )
    return {"plan": update.plan, "warnings": update.warnings}


@router.delete("/days/{day}/slots/{slot_index}")
async def clear_slot(
    day: date,
    slot_index: int,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Remove a slot from a day plan."""
    update = _container(request).day_plan_service.clear_slot(user_id, day, slot_index)
    return {"plan": update.plan, "warnings": update.warnings}


@router.post("/days/{day}/copy")
async def copy_day(
    day: date,
    body: CopyDayRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Copy a day's plan onto another date."""
    plan = _container(request).day_plan_service.copy_day(user_id, day, body.target_date)
    return {"plan": plan}


@router.post("/days/{day}/consume")
async def consume_day(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Mark a day consumed and return the new log entry."""
    entry = _container(request).day_plan_service.mark_consumed(user_id, day)
    return {"entry": entry}


@router.post("/shopping-lists")
async def generate_shopping_list(
    body: ShoppingListRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Generate the shopping list for a window; defaults to a seven-day week."""
    week_end = body.week_end or body.week_start + timedelta(days=6)
    shopping_list = _container(request).shopping_list_service.generate(
        user_id, body.week_start, week_end
    )
    return {"shopping_list": shopping_list}


@router.get("/shopping-lists/{week_start}")
async def get_shopping_list(
    week_start: date,
    request: Request,
    exclude_pantry: bool = False,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the formatted shopping list for a week, or null."""
    formatted = _container(request).shopping_list_service.get_formatted(
        user_id, week_start, exclude_pantry=exclude_pantry
    )
    return {"shopping_list": formatted}
