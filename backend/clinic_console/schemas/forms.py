"""Module: forms.

Write payloads, each bound to exactly one backend table. The backend client
reads ``table`` to pick the endpoint, so a form can never be sent to the
wrong table.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator

from clinic_console.core.dates import day_string, normalize_time
from clinic_console.schemas.records import RecordId, TableName


class RecordForm(BaseModel):
    table: ClassVar[TableName]


class BlockedSlotForm(RecordForm):
    table = TableName.BLOCKED_SLOT

    date: str
    time: str | None = None
    reason: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _day(cls, value):
        return day_string(value)

    @field_validator("time", mode="before")
    @classmethod
    def _time(cls, value):
        return normalize_time(value)


class AppointmentStatusForm(RecordForm):
    table = TableName.APPOINTMENTS

    status: Literal["draft", "booked"]


class PetForm(RecordForm):
    table = TableName.PETS

    name: str | None = None
    type: Literal["Dog", "Cat"] | None = None
    breed: str | None = None
    gender: str | None = None
    is_neutered: bool | None = None
    birthday: str | None = None


class UserForm(RecordForm):
    table = TableName.USERS

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    state: Literal["enabled", "disabled"] | None = None


class MedicalRecordForm(RecordForm):
    table = TableName.MEDICAL_RECORDS

    pet_id: RecordId
    title: str
    date: str
    hospital_details: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _day(cls, value):
        return day_string(value)


class MedicalRecordUpdateForm(RecordForm):
    table = TableName.MEDICAL_RECORDS

    hospital_details: str | None = None


class MedicalRecordPhotoForm(RecordForm):
    table = TableName.MEDICAL_RECORD_PHOTOS

    medical_record_id: RecordId
    image_data: str
    uploaded_by: Literal["user", "hospital"] = "hospital"


class VaccineHistoryForm(RecordForm):
    table = TableName.VACCINE_HISTORY

    vaccine_id: RecordId
    pet_id: RecordId
    date_administered: str
    treatment_info: str = Field(min_length=1)

    @field_validator("date_administered", mode="before")
    @classmethod
    def _day(cls, value):
        return day_string(value)


class VaccineHistoryPhotoForm(RecordForm):
    table = TableName.VACCINE_HISTORY_PHOTOS

    vaccine_history_id: RecordId
    type: str
    image_url: str


class VaccineTypeForm(RecordForm):
    table = TableName.VACCINE_TYPES

    name: str = Field(min_length=1)
    description: str | None = None


class VaccineNameForm(RecordForm):
    table = TableName.VACCINE_NAMES

    name: str = Field(min_length=1)
    description: str | None = None


class BreedForm(RecordForm):
    table = TableName.BREEDS

    name: str = Field(min_length=1)
    type: Literal["Dog", "Cat"] = "Dog"


class BulkNotificationForm(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)


class MedicalDraft(BaseModel):
    """One pet's section of the "create medical records" form."""

    pet_id: RecordId
    title: str
    date: date
    hospital_details: str = ""
    # Opaque image payloads (data URLs) uploaded by the hospital.
    photos: list[str] = []

    @field_validator("date", mode="before")
    @classmethod
    def _day(cls, value):
        return day_string(value)

    @property
    def has_content(self) -> bool:
        return bool(self.hospital_details) or bool(self.photos)
