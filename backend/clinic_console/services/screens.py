"""Module: screens.

One loader per console screen. A loader fetches every collection the screen
needs concurrently, waits for all of them, then joins. If any fetch fails the
whole load fails; partial joins are never attempted.

Search and filters run over the fetched page only, as the console always did.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from datetime import date, datetime
from typing import Hashable, Iterable, Literal

from pydantic import BaseModel

from clinic_console.core.errors import RecordNotFound
from clinic_console.schemas.records import (
    Appointment,
    Breed,
    Pet,
    TableName,
    User,
)
from clinic_console.schemas.views import (
    AppointmentView,
    EventView,
    MedicalRecordView,
    ScreenPage,
    UserView,
    VaccineRecordView,
)
from clinic_console.services import assembler
from clinic_console.services.backend import AdminBackend

ALL = "all"


# -------------------------
# Filters
# -------------------------
def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or "").lower()


def _in_range(day: date, start: date | None, end: date | None) -> bool:
    # Both bounds inclusive, compared by calendar day.
    return (start is None or day >= start) and (end is None or day <= end)


def _newest_first_key(created_at: datetime | None) -> tuple[bool, float]:
    return (created_at is not None, created_at.timestamp() if created_at else 0.0)


class AppointmentFilters(BaseModel):
    search: str = ""
    status: str = ALL
    start_date: date | None = None
    end_date: date | None = None


def filter_appointments(rows: Iterable[AppointmentView], f: AppointmentFilters) -> list[AppointmentView]:
    needle = f.search.strip().lower()
    kept = [
        a
        for a in rows
        if (not needle or _contains(a.member_name, needle))
        and (f.status == ALL or a.status == f.status)
        and _in_range(a.date, f.start_date, f.end_date)
    ]
    # Most recently created first.
    return sorted(kept, key=lambda a: _newest_first_key(a.created_at), reverse=True)


class PetFilters(BaseModel):
    search: str = ""
    type: str = ALL
    gender: str = ALL
    is_neutered: Literal["all", "yes", "no"] = ALL


def filter_pets(rows: Iterable[Pet], f: PetFilters) -> list[Pet]:
    needle = f.search.strip().lower()

    def neutered_match(pet: Pet) -> bool:
        if f.is_neutered == ALL:
            return True
        return bool(pet.is_neutered) == (f.is_neutered == "yes")

    return [
        p
        for p in rows
        if (not needle or _contains(p.name, needle) or _contains(p.type, needle) or _contains(p.breed, needle))
        and (f.type == ALL or p.type == f.type)
        and (f.gender == ALL or p.gender == f.gender)
        and neutered_match(p)
    ]


def breeds_for_species(breeds: Iterable[Breed], species: str | None) -> list[Breed]:
    if not species:
        return []
    return [b for b in breeds if b.type == species]


class UserFilters(BaseModel):
    search: str = ""
    state: str = ALL


def filter_users(rows: Iterable[UserView], f: UserFilters) -> list[UserView]:
    needle = f.search.strip().lower()
    return [
        u
        for u in rows
        if (not needle or _contains(u.first_name, needle) or _contains(u.last_name, needle) or _contains(u.email, needle))
        and (f.state == ALL or u.state == f.state)
    ]


class MedicalRecordFilters(BaseModel):
    search: str = ""
    pet_id: str = ALL
    start_date: date | None = None
    end_date: date | None = None


def filter_medical_records(rows: Iterable[MedicalRecordView], f: MedicalRecordFilters) -> list[MedicalRecordView]:
    needle = f.search.strip().lower()
    return [
        r
        for r in rows
        if (not needle or _contains(r.title, needle) or _contains(r.pet_name, needle))
        and (f.pet_id == ALL or str(r.pet_id) == f.pet_id)
        and _in_range(r.date, f.start_date, f.end_date)
    ]


class VaccineRecordFilters(BaseModel):
    search: str = ""
    pet_id: str = ALL
    vaccine_type: str = ALL


def filter_vaccine_records(rows: Iterable[VaccineRecordView], f: VaccineRecordFilters) -> list[VaccineRecordView]:
    needle = f.search.strip().lower()
    return [
        r
        for r in rows
        if (not needle or _contains(r.vaccine_name, needle) or _contains(r.pet_name, needle))
        and (f.pet_id == ALL or str(r.pet_id) == f.pet_id)
        and (f.vaccine_type == ALL or r.vaccine_type == f.vaccine_type)
    ]


def filter_events(rows: Iterable[EventView], search: str = "") -> list[EventView]:
    needle = search.strip().lower()
    if not needle:
        return list(rows)
    return [
        e
        for e in rows
        if _contains(e.title, needle)
        or _contains(e.user_name, needle)
        or _contains(e.user_email, needle)
        or _contains(e.pet_name, needle)
    ]


# -------------------------
# Loaders
# -------------------------
async def load_appointments(
    backend: AdminBackend, page: int, limit: int | None, filters: AppointmentFilters
) -> ScreenPage:
    appts, links, pets = await asyncio.gather(
        backend.fetch_page(TableName.APPOINTMENTS, page, limit),
        backend.fetch_all(TableName.APPOINTMENT_PET_LINKS),
        backend.fetch_all(TableName.PETS),
    )
    views = assembler.assemble_appointments(appts.data, links, pets)
    return ScreenPage(data=filter_appointments(views, filters), pagination=appts.pagination)


async def load_appointment(backend: AdminBackend, appointment_id: Hashable) -> AppointmentView:
    """Single appointment with its pets, looked up in the capped fetch."""
    appts, links, pets = await asyncio.gather(
        backend.fetch_all(TableName.APPOINTMENTS),
        backend.fetch_all(TableName.APPOINTMENT_PET_LINKS),
        backend.fetch_all(TableName.PETS),
    )
    matching = [a for a in appts if str(a.id) == str(appointment_id)]
    if not matching:
        raise RecordNotFound("Appointment not found")
    return assembler.assemble_appointments(matching, links, pets)[0]


async def load_pets(backend: AdminBackend, page: int, limit: int | None, filters: PetFilters) -> ScreenPage:
    pets_page = await backend.fetch_page(TableName.PETS, page, limit)
    return ScreenPage(
        data=filter_pets(pets_page.data, filters),
        pagination=pets_page.pagination,
    )


async def load_users(backend: AdminBackend, page: int, limit: int | None, filters: UserFilters) -> ScreenPage:
    users_page, pets = await asyncio.gather(
        backend.fetch_page(TableName.USERS, page, limit),
        backend.fetch_all(TableName.PETS),
    )
    views = assembler.assemble_users(users_page.data, pets)
    return ScreenPage(data=filter_users(views, filters), pagination=users_page.pagination)


async def load_medical_records(
    backend: AdminBackend, page: int, limit: int | None, filters: MedicalRecordFilters
) -> ScreenPage:
    records, pets, photos = await asyncio.gather(
        backend.fetch_page(TableName.MEDICAL_RECORDS, page, limit),
        backend.fetch_all(TableName.PETS),
        backend.fetch_all(TableName.MEDICAL_RECORD_PHOTOS),
    )
    views = assembler.assemble_medical_records(records.data, photos, pets)
    return ScreenPage(data=filter_medical_records(views, filters), pagination=records.pagination)


async def load_vaccine_records(
    backend: AdminBackend, page: int, limit: int | None, filters: VaccineRecordFilters
) -> ScreenPage:
    records, pets, images, history, history_photos = await asyncio.gather(
        backend.fetch_page(TableName.VACCINE_RECORDS, page, limit),
        backend.fetch_all(TableName.PETS),
        backend.fetch_all(TableName.VACCINE_RECORD_IMAGES),
        backend.fetch_all(TableName.VACCINE_HISTORY),
        backend.fetch_all(TableName.VACCINE_HISTORY_PHOTOS),
    )
    views = assembler.assemble_vaccine_records(records.data, images, history, history_photos, pets)
    return ScreenPage(data=filter_vaccine_records(views, filters), pagination=records.pagination)


async def load_events(backend: AdminBackend, page: int, limit: int | None, search: str = "") -> ScreenPage:
    events, users, pets = await asyncio.gather(
        backend.fetch_page(TableName.UPCOMING_EVENTS, page, limit),
        backend.fetch_all(TableName.USERS),
        backend.fetch_all(TableName.PETS),
    )
    views = assembler.assemble_events(events.data, users, pets)
    return ScreenPage(data=filter_events(views, search), pagination=events.pagination)


# -------------------------
# Dashboard
# -------------------------
SIDEBAR_TABLES = {
    "pets": TableName.PETS,
    "appointments": TableName.APPOINTMENTS,
    "medical_records": TableName.MEDICAL_RECORDS,
    "vaccines": TableName.VACCINE_RECORDS,
    "users": TableName.USERS,
    "events": TableName.UPCOMING_EVENTS,
}


async def load_sidebar_counts(backend: AdminBackend) -> dict[str, int]:
    totals = await asyncio.gather(*(backend.fetch_total(t) for t in SIDEBAR_TABLES.values()))
    return dict(zip(SIDEBAR_TABLES.keys(), totals))


def _activity_feed(
    pets: list[Pet], users: list[User], appointments: list[Appointment], limit: int = 6
) -> list[dict]:
    users_by_id = assembler.index_by_id(users)

    entries: list[tuple[datetime, dict]] = []
    for pet in pets:
        if pet.created_at is None:
            continue
        owner = users_by_id.get(pet.user_id)
        entries.append(
            (
                pet.created_at,
                {
                    "id": f"pet-{pet.id}",
                    "type": "registration",
                    "title": "New Pet Registered",
                    "description": f'{pet.breed or ""} "{pet.name}" registered'.strip(),
                    "pet": pet.name,
                    "user": owner.full_name if owner else "",
                },
            )
        )
    for user in users:
        if user.created_at is None:
            continue
        entries.append(
            (
                user.created_at,
                {
                    "id": f"user-{user.id}",
                    "type": "user",
                    "title": "New User Registration",
                    "description": f"{user.full_name} joined",
                    "user": user.full_name,
                },
            )
        )
    for appt in appointments:
        if appt.created_at is None:
            continue
        entries.append(
            (
                appt.created_at,
                {
                    "id": f"appt-{appt.id}",
                    "type": "appointment",
                    "title": f"Appointment {appt.status}",
                    "description": f"Booking for {appt.number_of_pets} pet(s)",
                    "user": appt.member_name,
                },
            )
        )

    entries.sort(key=lambda e: e[0].timestamp(), reverse=True)
    return [{**item, "timestamp": ts} for ts, item in entries[:limit]]


async def load_dashboard(backend: AdminBackend) -> dict:
    pets, users, appts, medical, vaccines = await asyncio.gather(
        backend.fetch_page(TableName.PETS, 1, backend.settings.fetch_all_limit),
        backend.fetch_page(TableName.USERS, 1, backend.settings.fetch_all_limit),
        backend.fetch_page(TableName.APPOINTMENTS, 1, backend.settings.fetch_all_limit),
        backend.fetch_page(TableName.MEDICAL_RECORDS, 1, backend.settings.fetch_all_limit),
        backend.fetch_page(TableName.VACCINE_RECORDS, 1, backend.settings.fetch_all_limit),
    )

    pet_types = Counter(p.type for p in pets.data)
    # "booked" appointments count as completed, everything else is pending.
    statuses = Counter("Completed" if a.status == "booked" else "Pending" for a in appts.data)
    vaccine_counts = Counter(v.vaccine_name for v in vaccines.data)

    return {
        "stats": {
            "pets": pets.pagination.total,
            "users": users.pagination.total,
            "appointments": appts.pagination.total,
            "medical_records": medical.pagination.total,
            "vaccines": vaccines.pagination.total,
        },
        "pet_types": [
            {"name": "Dogs", "value": pet_types.get("Dog", 0)},
            {"name": "Cats", "value": pet_types.get("Cat", 0)},
        ],
        "appointment_status": [
            {"status": "Completed", "count": statuses.get("Completed", 0)},
            {"status": "Pending", "count": statuses.get("Pending", 0)},
        ],
        "top_vaccines": [{"vaccine": name, "count": n} for name, n in vaccine_counts.most_common(5)],
        "recent_activity": _activity_feed(pets.data, users.data, appts.data),
    }

