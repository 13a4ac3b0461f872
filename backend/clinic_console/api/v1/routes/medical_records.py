"""Module: medical_records."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from clinic_console.api.v1.routes.deps import BulkDeletePayload, get_backend
from clinic_console.schemas.forms import MedicalRecordPhotoForm, MedicalRecordUpdateForm
from clinic_console.schemas.records import TableName
from clinic_console.services import screens
from clinic_console.services.backend import AdminBackend

router = APIRouter()


class MedicalRecordUpdatePayload(BaseModel):
    hospital_details: str | None = None
    # New hospital photos (opaque data URLs) appended to the record.
    new_photos: list[str] = []


# Endpoint: one page of medical records joined with photos and pet names.
@router.get("", summary="List medical records (with photos)")
async def list_medical_records(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=1000),
    search: str = "",
    pet_id: str = "all",
    start_date: date | None = None,
    end_date: date | None = None,
    backend: AdminBackend = Depends(get_backend),
):
    filters = screens.MedicalRecordFilters(
        search=search, pet_id=pet_id, start_date=start_date, end_date=end_date
    )
    return await screens.load_medical_records(backend, page, limit, filters)


# Endpoint: update hospital details and attach new hospital photos.
@router.put("/{record_id}", summary="Update a medical record")
async def update_medical_record(
    record_id: str,
    payload: MedicalRecordUpdatePayload,
    backend: AdminBackend = Depends(get_backend),
):
    # Only send hospital_details when the caller provided it; a photo-only update keeps the text.
    if "hospital_details" in payload.model_fields_set:
        await backend.update(MedicalRecordUpdateForm(hospital_details=payload.hospital_details), record_id)
    for image in payload.new_photos:
        await backend.create(
            MedicalRecordPhotoForm(medical_record_id=record_id, image_data=image, uploaded_by="hospital")
        )
    return {"id": record_id, "photos_added": len(payload.new_photos)}


# Endpoint: bulk delete.
@router.delete("", summary="Delete medical records")
async def delete_medical_records(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.MEDICAL_RECORDS, payload.ids)
