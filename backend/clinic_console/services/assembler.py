"""
Relational View Assembler

The admin backend serves flat, unjoined tables. Screens that show nested data
(appointment pets, record photos, vaccine history) join the independently
fetched collections here, in memory.

Rules shared by every join:
- children keep the order they had in the fetched child collection;
- a child whose foreign key matches no fetched parent is dropped silently
  (capped fetches make incomplete sets the normal case);
- a null foreign key never groups under a "null" parent;
- functions are pure: same inputs, structurally identical output.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Hashable, Iterable, Mapping, Sequence

from clinic_console.schemas.forms import MedicalDraft
from clinic_console.schemas.records import (
    Appointment,
    AppointmentPetLink,
    MedicalRecord,
    MedicalRecordPhoto,
    Pet,
    UpcomingEvent,
    User,
    VaccineHistory,
    VaccineHistoryPhoto,
    VaccineRecord,
    VaccineRecordImage,
)
from clinic_console.schemas.views import (
    AppointmentPetView,
    AppointmentView,
    EventView,
    MedicalRecordView,
    PhotoView,
    UserView,
    VaccineHistoryView,
    VaccineRecordView,
)

UNREGISTERED_PET_NAME = "Unregistered Pet"
UNKNOWN_PET_TYPE = "N/A"
UNKNOWN_USER_NAME = "Unknown User"
UNKNOWN_USER_EMAIL = "N/A"


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


# -------------------------
# Generic joins
# -------------------------
def index_by_id(records: Iterable[Any]) -> dict[Hashable, Any]:
    # First occurrence wins if the backend ever returns a duplicate id.
    out: dict[Hashable, Any] = {}
    for record in records:
        out.setdefault(_field(record, "id"), record)
    return out


def group_by_parent(
    parents: Iterable[Any],
    children: Iterable[Any],
    foreign_key: str,
) -> dict[Hashable, list[Any]]:
    """Map every parent id to its children; orphans and null keys are skipped."""
    grouped: dict[Hashable, list[Any]] = {_field(p, "id"): [] for p in parents}
    for child in children:
        key = _field(child, foreign_key)
        if key is None or key not in grouped:
            continue
        grouped[key].append(child)
    return grouped


# -------------------------
# Appointments
# -------------------------
def resolve_appointment_pet(link: AppointmentPetLink, pets_by_id: Mapping[Hashable, Pet]) -> AppointmentPetView:
    """
    Registered pets are read from the pets table; walk-ins (null or unknown
    pet_id) fall back to the name/type snapshot stored on the link.
    """
    pet = pets_by_id.get(link.pet_id) if link.pet_id is not None else None
    return AppointmentPetView(
        id=link.pet_id if link.pet_id is not None else link.id,
        link_id=link.id,
        registered=pet is not None,
        name=(pet.name if pet else None) or link.name or UNREGISTERED_PET_NAME,
        type=(pet.type if pet else None) or link.type or UNKNOWN_PET_TYPE,
        purpose_of_visit=link.purpose_of_visit,
        memo=link.memo,
    )


def assemble_appointments(
    appointments: Sequence[Appointment],
    links: Iterable[AppointmentPetLink],
    pets: Iterable[Pet],
) -> list[AppointmentView]:
    pets_by_id = index_by_id(pets)
    grouped = group_by_parent(appointments, links, "appointment_id")
    return [
        AppointmentView(
            **appt.model_dump(),
            pets=[resolve_appointment_pet(link, pets_by_id) for link in grouped[appt.id]],
        )
        for appt in appointments
    ]


def medical_drafts_for(appointment: AppointmentView, today: date | None = None) -> list[MedicalDraft]:
    """One empty medical-record draft per registered pet of the appointment."""
    today = today or date.today()
    return [
        MedicalDraft(pet_id=pet.id, title=f"Check-up for {pet.name}", date=today)
        for pet in appointment.pets
        if pet.registered
    ]


# -------------------------
# Medical records
# -------------------------
def assemble_medical_records(
    records: Sequence[MedicalRecord],
    photos: Iterable[MedicalRecordPhoto],
    pets: Iterable[Pet],
) -> list[MedicalRecordView]:
    pets_by_id = index_by_id(pets)
    grouped = group_by_parent(records, photos, "medical_record_id")
    out = []
    for record in records:
        pet = pets_by_id.get(record.pet_id)
        out.append(
            MedicalRecordView(
                **record.model_dump(),
                pet_name=pet.name if pet else None,
                photos=[PhotoView(image_data=p.image_data, uploaded_by=p.uploaded_by) for p in grouped[record.id]],
            )
        )
    return out


# -------------------------
# Vaccines
# -------------------------
def assemble_vaccine_history(
    history: Sequence[VaccineHistory],
    photos: Iterable[VaccineHistoryPhoto],
) -> list[VaccineHistoryView]:
    grouped = group_by_parent(history, photos, "vaccine_history_id")
    return [VaccineHistoryView(**h.model_dump(), photos=grouped[h.id]) for h in history]


def assemble_vaccine_records(
    records: Sequence[VaccineRecord],
    images: Iterable[VaccineRecordImage],
    history: Sequence[VaccineHistory],
    history_photos: Iterable[VaccineHistoryPhoto],
    pets: Iterable[Pet],
) -> list[VaccineRecordView]:
    # Bottom-up: photos into history first, then images and history into records.
    enriched_history = assemble_vaccine_history(history, history_photos)
    history_by_record = group_by_parent(records, enriched_history, "vaccine_id")
    images_by_record = group_by_parent(records, images, "vaccine_record_id")
    pets_by_id = index_by_id(pets)

    out = []
    for record in records:
        pet = pets_by_id.get(record.pet_id)
        out.append(
            VaccineRecordView(
                **record.model_dump(),
                pet_name=pet.name if pet else None,
                images=images_by_record[record.id],
                history=history_by_record[record.id],
            )
        )
    return out


# -------------------------
# Users and events
# -------------------------
def assemble_users(users: Sequence[User], pets: Iterable[Pet]) -> list[UserView]:
    grouped = group_by_parent(users, pets, "user_id")
    return [UserView(**u.model_dump(), pets_count=len(grouped[u.id])) for u in users]


def assemble_events(
    events: Sequence[UpcomingEvent],
    users: Iterable[User],
    pets: Iterable[Pet],
) -> list[EventView]:
    users_by_id = index_by_id(users)
    pets_by_id = index_by_id(pets)

    out = []
    for event in events:
        user = users_by_id.get(event.user_id)
        pet = pets_by_id.get(event.pet_id) if event.pet_id is not None else None
        out.append(
            EventView(
                **event.model_dump(),
                user_name=(user.full_name if user else "") or UNKNOWN_USER_NAME,
                user_email=user.email if user else UNKNOWN_USER_EMAIL,
                pet_name=pet.name if pet else None,
            )
        )
    return out
