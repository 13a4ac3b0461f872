"""Module: records.

One pydantic model per backend table. The backend returns flat, unjoined rows;
joined views are built in ``clinic_console.services.assembler``.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from typing import Annotated, Generic, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field

from clinic_console.core.dates import normalize_time, parse_day


class TableName(StrEnum):
    APPOINTMENTS = "appointments"
    APPOINTMENT_PET_LINKS = "appointment_pet_links"
    PETS = "pets"
    BREEDS = "breeds"
    MEDICAL_RECORDS = "medical_records"
    MEDICAL_RECORD_PHOTOS = "medical_record_photos"
    VACCINE_RECORDS = "vaccine_records"
    VACCINE_RECORD_IMAGES = "vaccine_record_images"
    VACCINE_HISTORY = "vaccine_history"
    VACCINE_HISTORY_PHOTOS = "vaccine_history_photos"
    BLOCKED_SLOT = "blocked_slot"
    USERS = "users"
    UPCOMING_EVENTS = "upcoming_events"
    VACCINE_TYPES = "vaccine_types"
    VACCINE_NAMES = "vaccine_names"


def _coerce_day(value):
    if value is None or isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_day(value)


# Backend dates arrive as "YYYY-MM-DD" or full ISO timestamps; only the day counts.
CalendarDay = Annotated[date, BeforeValidator(_coerce_day)]
ClockTime = Annotated[str | None, BeforeValidator(normalize_time)]


def _coerce_id(value):
    # Ids taken from URL paths arrive as strings; numeric ones must join with backend ints.
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


RecordId = Annotated[int | str, BeforeValidator(_coerce_id)]


class Record(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: RecordId


# -------------------------
# Scheduling
# -------------------------
class BlockedSlot(Record):
    date: CalendarDay
    # HH:MM:SS, or None when the whole day is blocked.
    time: ClockTime = None
    reason: str | None = None


class Appointment(Record):
    user_id: RecordId | None = None
    date: CalendarDay
    time: str | None = None
    time_slot: str | None = None
    number_of_pets: int = 0
    member_first_name: str = ""
    member_last_name: str = ""
    member_phone: str | None = None
    status: str = "draft"
    created_at: datetime | None = None

    @computed_field
    @property
    def member_name(self) -> str:
        return f"{self.member_first_name} {self.member_last_name}".strip()


class AppointmentPetLink(Record):
    appointment_id: RecordId
    # Null for walk-in pets that are not in the pets table.
    pet_id: RecordId | None = None
    purpose_of_visit: str | None = None
    memo: str | None = None
    # Snapshot used when pet_id is null or unknown.
    name: str | None = None
    type: str | None = None


# -------------------------
# Pets and owners
# -------------------------
class Pet(Record):
    user_id: RecordId | None = None
    name: str = ""
    type: str | None = None
    breed: str | None = None
    gender: str | None = None
    is_neutered: bool | None = None
    birthday: str | None = None
    image: str | None = None
    created_at: datetime | None = None


class Breed(Record):
    name: str
    type: str | None = None


class User(Record):
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    state: str | None = None
    profile_image: str | None = None
    created_at: datetime | None = None

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


# -------------------------
# Medical records
# -------------------------
class MedicalRecord(Record):
    pet_id: RecordId
    title: str = ""
    date: CalendarDay
    user_details: str | None = None
    hospital_details: str | None = None
    created_at: datetime | None = None


class MedicalRecordPhoto(Record):
    medical_record_id: RecordId | None = None
    image_data: str
    uploaded_by: str = "user"


# -------------------------
# Vaccines
# -------------------------
class VaccineRecord(Record):
    pet_id: RecordId
    vaccine_type: str | None = None
    vaccine_name: str = ""
    vaccination_date: CalendarDay
    due_date: CalendarDay | None = None
    veterinarian: str | None = None
    notes: str | None = None


class VaccineRecordImage(Record):
    vaccine_record_id: RecordId | None = None
    image_data: str


class VaccineHistory(Record):
    vaccine_id: RecordId | None = None
    pet_id: RecordId | None = None
    treatment_info: str = ""
    date_administered: CalendarDay


class VaccineHistoryPhoto(Record):
    vaccine_history_id: RecordId | None = None
    type: str | None = None
    image_url: str


class VaccineType(Record):
    name: str
    description: str | None = None


class VaccineName(Record):
    name: str
    description: str | None = None


# -------------------------
# Notifications
# -------------------------
class UpcomingEvent(Record):
    user_id: RecordId | None = None
    pet_id: RecordId | None = None
    event_type: str | None = None
    title: str = ""
    description: str | None = None
    event_date: CalendarDay
    event_time: str | None = None
    status: str | None = None


RECORD_MODELS: dict[TableName, type[Record]] = {
    TableName.APPOINTMENTS: Appointment,
    TableName.APPOINTMENT_PET_LINKS: AppointmentPetLink,
    TableName.PETS: Pet,
    TableName.BREEDS: Breed,
    TableName.MEDICAL_RECORDS: MedicalRecord,
    TableName.MEDICAL_RECORD_PHOTOS: MedicalRecordPhoto,
    TableName.VACCINE_RECORDS: VaccineRecord,
    TableName.VACCINE_RECORD_IMAGES: VaccineRecordImage,
    TableName.VACCINE_HISTORY: VaccineHistory,
    TableName.VACCINE_HISTORY_PHOTOS: VaccineHistoryPhoto,
    TableName.BLOCKED_SLOT: BlockedSlot,
    TableName.USERS: User,
    TableName.UPCOMING_EVENTS: UpcomingEvent,
    TableName.VACCINE_TYPES: VaccineType,
    TableName.VACCINE_NAMES: VaccineName,
}

AdminRecord = Union[
    Appointment,
    AppointmentPetLink,
    Pet,
    Breed,
    MedicalRecord,
    MedicalRecordPhoto,
    VaccineRecord,
    VaccineRecordImage,
    VaccineHistory,
    VaccineHistoryPhoto,
    BlockedSlot,
    User,
    UpcomingEvent,
    VaccineType,
    VaccineName,
]

RecordT = TypeVar("RecordT", bound=Record)


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = Field(default=1, alias="totalPages")


class Page(BaseModel, Generic[RecordT]):
    data: list[RecordT]
    pagination: Pagination

    @property
    def truncated(self) -> bool:
        # Capped "fetch all" requests: backend has more rows than it returned.
        return self.pagination.total > len(self.data)
