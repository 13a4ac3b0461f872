"""Module: appointments."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from clinic_console.api.v1.routes.deps import BulkDeletePayload, get_backend
from clinic_console.schemas.forms import (
    AppointmentStatusForm,
    MedicalDraft,
    MedicalRecordForm,
    MedicalRecordPhotoForm,
)
from clinic_console.schemas.records import TableName
from clinic_console.services import assembler, screens
from clinic_console.services.backend import AdminBackend

logger = logging.getLogger(__name__)

router = APIRouter()


class MedicalRecordsPayload(BaseModel):
    forms: list[MedicalDraft]


# Endpoint: one page of appointments joined with their pets, then filtered.
@router.get("", summary="List appointments (with pets)")
async def list_appointments(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=1000),
    search: str = "",
    status: str = "all",
    start_date: date | None = None,
    end_date: date | None = None,
    backend: AdminBackend = Depends(get_backend),
):
    filters = screens.AppointmentFilters(
        search=search, status=status, start_date=start_date, end_date=end_date
    )
    return await screens.load_appointments(backend, page, limit, filters)


# Endpoint: registered and walk-in pets attached to one appointment.
@router.get("/{appointment_id}/pets", summary="Pets in an appointment")
async def appointment_pets(appointment_id: str, backend: AdminBackend = Depends(get_backend)):
    appointment = await screens.load_appointment(backend, appointment_id)
    return appointment.pets


# Endpoint: prefilled medical-record forms, one per registered pet.
@router.get("/{appointment_id}/medical-drafts", summary="Medical record drafts for an appointment")
async def appointment_medical_drafts(appointment_id: str, backend: AdminBackend = Depends(get_backend)):
    appointment = await screens.load_appointment(backend, appointment_id)
    return assembler.medical_drafts_for(appointment)


# Endpoint: change draft/booked status.
@router.patch("/{appointment_id}/status", summary="Update appointment status")
async def update_appointment_status(
    appointment_id: str,
    payload: AppointmentStatusForm,
    backend: AdminBackend = Depends(get_backend),
):
    await backend.update(payload, appointment_id)
    return {"id": appointment_id, "status": payload.status}


# Endpoint: create medical records (and hospital photos) from an appointment.
@router.post("/{appointment_id}/medical-records", summary="Create medical records for appointment pets")
async def create_medical_records(
    appointment_id: str,
    payload: MedicalRecordsPayload,
    backend: AdminBackend = Depends(get_backend),
):
    created = []
    for draft in payload.forms:
        # Empty sections are skipped, as in the form.
        if not draft.has_content:
            continue

        record = await backend.create(
            MedicalRecordForm(
                pet_id=draft.pet_id,
                title=draft.title,
                date=draft.date,
                hospital_details=draft.hospital_details,
            )
        )
        for image in draft.photos:
            await backend.create(
                MedicalRecordPhotoForm(medical_record_id=record.id, image_data=image, uploaded_by="hospital")
            )
        created.append({"id": record.id, "pet_id": draft.pet_id, "photos": len(draft.photos)})

    logger.info("Created %s medical record(s) from appointment %s", len(created), appointment_id)
    return {"appointment_id": appointment_id, "created": created}


# Endpoint: bulk delete.
@router.delete("", summary="Delete appointments")
async def delete_appointments(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.APPOINTMENTS, payload.ids)
