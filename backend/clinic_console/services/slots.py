"""
Slot Availability Service

Answers "is this date/time bookable?" against the blocked_slot table and
toggles blocks on and off.

A blocked_slot row is scoped to one calendar day and either one time
(HH:MM:SS) or the whole day (time is None). Days are always compared as
YYYY-MM-DD strings so a local datetime never drifts to the neighbouring day.
"""

from __future__ import annotations

import calendar
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, time
from typing import Iterable, Literal

from pydantic import BaseModel

from clinic_console.core.config import WholeDayPolicy
from clinic_console.core.dates import day_string, normalize_time
from clinic_console.core.errors import SlotPolicyError, SlotToggleInProgress
from clinic_console.schemas.forms import BlockedSlotForm
from clinic_console.schemas.records import BlockedSlot, TableName
from clinic_console.services.backend import AdminBackend

logger = logging.getLogger(__name__)

DayLike = date | datetime | str
TimeLike = time | str | None


# -------------------------
# View models
# -------------------------
class TimeSlotState(BaseModel):
    time: str
    label: str
    period: Literal["AM", "PM"]
    blocked: bool
    # The control cannot be clicked (whole-day block hides this time).
    disabled: bool


class DayPanel(BaseModel):
    date: str
    whole_day_blocked: bool
    am: list[TimeSlotState]
    pm: list[TimeSlotState]


class CalendarCell(BaseModel):
    date: str
    day: int
    has_block: bool


class ToggleResult(BaseModel):
    action: Literal["blocked", "unblocked"]
    date: str
    time: str | None
    slots: list[BlockedSlot]


# -------------------------
# Pure resolver
# -------------------------
def _rows_for_day(day: DayLike, slots: Iterable[BlockedSlot]) -> list[BlockedSlot]:
    key = day_string(day)
    return [s for s in slots if day_string(s.date) == key]


def is_date_blocked(day: DayLike, slots: Iterable[BlockedSlot]) -> bool:
    """True only for a whole-day block; a blocked time alone does not count."""
    return any(s.time is None for s in _rows_for_day(day, slots))


def find_slot(day: DayLike, at: TimeLike, slots: Iterable[BlockedSlot]) -> BlockedSlot | None:
    wanted = normalize_time(at)
    for s in _rows_for_day(day, slots):
        if s.time == wanted:
            return s
    return None


def is_time_blocked(day: DayLike, at: TimeLike, slots: Iterable[BlockedSlot]) -> bool:
    slots = list(slots)
    if is_date_blocked(day, slots):
        return True
    if normalize_time(at) is None:
        return False
    return find_slot(day, at, slots) is not None


def blocked_days(slots: Iterable[BlockedSlot]) -> set[str]:
    # Any row marks the day, whole-day or not (calendar dot).
    return {day_string(s.date) for s in slots}


def is_time_disabled(
    day: DayLike,
    at: TimeLike,
    slots: Iterable[BlockedSlot],
    policy: WholeDayPolicy = WholeDayPolicy.COEXIST,
) -> bool:
    """Whether a single-time control is locked by a whole-day block."""
    slots = list(slots)
    if normalize_time(at) is None or not is_date_blocked(day, slots):
        return False
    if policy is WholeDayPolicy.SUPERSEDE:
        return True
    # Coexist: a time blocked in its own right stays clickable so it can be released.
    return find_slot(day, at, slots) is None


def _display_label(hhmmss: str) -> str:
    hour, minute = int(hhmmss[:2]), hhmmss[3:5]
    return f"{hour % 12 or 12:02d}:{minute}"


def day_panel(
    day: DayLike,
    slots: Iterable[BlockedSlot],
    slot_times: Iterable[str],
    policy: WholeDayPolicy = WholeDayPolicy.COEXIST,
) -> DayPanel:
    slots = _rows_for_day(day, slots)
    whole_day = is_date_blocked(day, slots)

    am: list[TimeSlotState] = []
    pm: list[TimeSlotState] = []
    for raw in slot_times:
        at = normalize_time(raw)
        period = "AM" if int(at[:2]) < 12 else "PM"
        state = TimeSlotState(
            time=at,
            label=_display_label(at),
            period=period,
            blocked=is_time_blocked(day, at, slots),
            disabled=is_time_disabled(day, at, slots, policy),
        )
        (am if period == "AM" else pm).append(state)

    return DayPanel(date=day_string(day), whole_day_blocked=whole_day, am=am, pm=pm)


def month_calendar(year: int, month: int, slots: Iterable[BlockedSlot]) -> list[CalendarCell | None]:
    """
    Month grid, Sunday first. Leading ``None`` entries pad the first week.
    """
    marked = blocked_days(slots)
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar.monthrange counts Monday as 0; the grid starts on Sunday.
    leading = (first_weekday + 1) % 7

    cells: list[CalendarCell | None] = [None] * leading
    for day_number in range(1, days_in_month + 1):
        key = date(year, month, day_number).isoformat()
        cells.append(CalendarCell(date=key, day=day_number, has_block=key in marked))
    return cells


# -------------------------
# Toggling
# -------------------------
class SlotToggleGuard:
    """
    Tracks toggles in flight so the same (day, time) cannot be submitted twice
    concurrently. A second request is rejected, not queued.
    """

    def __init__(self):
        self._in_flight: set[tuple[str, str | None]] = set()

    def is_busy(self, day: DayLike, at: TimeLike) -> bool:
        return (day_string(day), normalize_time(at)) in self._in_flight

    @asynccontextmanager
    async def hold(self, day: DayLike, at: TimeLike):
        key = (day_string(day), normalize_time(at))
        if key in self._in_flight:
            raise SlotToggleInProgress()
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)


class SlotService:
    def __init__(
        self,
        backend: AdminBackend,
        guard: SlotToggleGuard,
        policy: WholeDayPolicy = WholeDayPolicy.COEXIST,
    ):
        self.backend = backend
        self.guard = guard
        self.policy = policy

    async def list_slots(self) -> list[BlockedSlot]:
        return await self.backend.fetch_all(TableName.BLOCKED_SLOT)

    async def toggle(self, day: DayLike, at: TimeLike = None, reason: str | None = None) -> ToggleResult:
        """
        Unblock (date, time) if a matching row exists, block it otherwise.

        Works from a fresh read of the backend, never from a cached view, and
        returns the re-fetched slot list only after the write succeeded.
        """
        day_key = day_string(day)
        at = normalize_time(at)

        async with self.guard.hold(day_key, at):
            slots = await self.list_slots()
            # Under coexist the disabled flag is display-only; toggles stay self-inverse.
            if self.policy is WholeDayPolicy.SUPERSEDE and is_time_disabled(day_key, at, slots, self.policy):
                raise SlotPolicyError()

            existing = find_slot(day_key, at, slots)
            if existing is not None:
                await self.backend.delete(TableName.BLOCKED_SLOT, [existing.id])
                action = "unblocked"
            else:
                await self.backend.create(BlockedSlotForm(date=day_key, time=at, reason=reason))
                action = "blocked"

            logger.info("Slot %s %s %s", day_key, at or "(all day)", action)
            refreshed = await self.list_slots()

        return ToggleResult(action=action, date=day_key, time=at, slots=refreshed)
