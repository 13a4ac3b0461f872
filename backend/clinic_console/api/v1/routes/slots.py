"""Module: slots."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, field_validator

from clinic_console.api.v1.routes.deps import get_slot_service
from clinic_console.core.config import Settings, get_settings
from clinic_console.core.dates import day_string, normalize_time
from clinic_console.services.slots import SlotService, day_panel, month_calendar

router = APIRouter()


class SlotTogglePayload(BaseModel):
    date: str
    # HH:MM or HH:MM:SS; omit or null to toggle the whole day.
    time: str | None = None
    reason: str | None = None

    @field_validator("date")
    @classmethod
    def _day(cls, value: str) -> str:
        return day_string(value)

    @field_validator("time")
    @classmethod
    def _time(cls, value: str | None) -> str | None:
        return normalize_time(value)


def _parse_day(value: str) -> str:
    try:
        return day_string(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date (expected YYYY-MM-DD)")


# Endpoint: raw blocked-slot rows.
@router.get("", summary="List blocked slots")
async def list_blocked_slots(service: SlotService = Depends(get_slot_service)):
    return await service.list_slots()


# Endpoint: month grid with a marker on every day carrying any block.
@router.get("/calendar", summary="Month calendar with blocked-day markers")
async def slots_calendar(
    month: str = Query(..., pattern=r"^\d{4}-\d{2}$"),
    service: SlotService = Depends(get_slot_service),
):
    try:
        year, month_number = (int(part) for part in month.split("-"))
        date(year, month_number, 1)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid month format (expected YYYY-MM)")

    slots = await service.list_slots()
    return {"month": month, "days": month_calendar(year, month_number, slots)}


# Endpoint: whole-day and per-time state for the slot management panel.
@router.get("/day", summary="Slot panel for one day")
async def slots_day(
    day: str = Query(..., alias="date"),
    service: SlotService = Depends(get_slot_service),
    settings: Settings = Depends(get_settings),
):
    day_key = _parse_day(day)
    slots = await service.list_slots()
    return day_panel(day_key, slots, settings.slot_times, settings.whole_day_policy)


# Endpoint: block the slot if it is free, unblock it if it is blocked.
@router.post("/toggle", summary="Block or unblock a date or time")
async def toggle_slot(payload: SlotTogglePayload, service: SlotService = Depends(get_slot_service)):
    return await service.toggle(payload.date, payload.time, payload.reason)
