"""Module: views.

Joined, display-ready shapes returned by the console API. Each view extends
the flat record it is built from.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from clinic_console.schemas.records import (
    Appointment,
    MedicalRecord,
    Pagination,
    RecordId,
    UpcomingEvent,
    User,
    VaccineHistory,
    VaccineHistoryPhoto,
    VaccineRecord,
    VaccineRecordImage,
)


class AppointmentPetView(BaseModel):
    # pet_id when registered, otherwise the link id.
    id: RecordId
    link_id: RecordId
    registered: bool
    name: str
    type: str
    purpose_of_visit: str | None = None
    memo: str | None = None


class AppointmentView(Appointment):
    pets: list[AppointmentPetView] = []


class PhotoView(BaseModel):
    image_data: str
    uploaded_by: str


class MedicalRecordView(MedicalRecord):
    pet_name: str | None = None
    photos: list[PhotoView] = []


class VaccineHistoryView(VaccineHistory):
    photos: list[VaccineHistoryPhoto] = []


class VaccineRecordView(VaccineRecord):
    pet_name: str | None = None
    images: list[VaccineRecordImage] = []
    history: list[VaccineHistoryView] = []


class EventView(UpcomingEvent):
    user_name: str
    user_email: str
    pet_name: str | None = None


class UserView(User):
    pets_count: int = 0


class ScreenPage(BaseModel):
    """A page of joined rows plus the backend's pagination for the parent table."""

    data: list[Any]
    pagination: Pagination
