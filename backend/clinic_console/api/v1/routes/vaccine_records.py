"""Module: vaccine_records."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from clinic_console.api.v1.routes.deps import BulkDeletePayload, get_backend
from clinic_console.schemas.forms import VaccineHistoryForm, VaccineHistoryPhotoForm
from clinic_console.schemas.records import RecordId, TableName
from clinic_console.services import screens
from clinic_console.services.backend import AdminBackend

logger = logging.getLogger(__name__)

router = APIRouter()


class HistoryPhotoPayload(BaseModel):
    # Free-form label such as "Bill" or "X-Ray".
    type: str = "Etc"
    image_data: str


class HistoryCreatePayload(BaseModel):
    pet_id: RecordId
    date_administered: str = Field(min_length=1)
    treatment_info: str = Field(min_length=1)
    photos: list[HistoryPhotoPayload] = []


# Endpoint: one page of vaccine records with images, history and history photos.
@router.get("", summary="List vaccine records (with history)")
async def list_vaccine_records(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=1000),
    search: str = "",
    pet_id: str = "all",
    vaccine_type: str = "all",
    backend: AdminBackend = Depends(get_backend),
):
    filters = screens.VaccineRecordFilters(search=search, pet_id=pet_id, vaccine_type=vaccine_type)
    return await screens.load_vaccine_records(backend, page, limit, filters)


# Endpoint: add a history entry (and its photos) to a vaccine record.
@router.post("/{record_id}/history", summary="Add vaccine history")
async def add_vaccine_history(
    record_id: str,
    payload: HistoryCreatePayload,
    backend: AdminBackend = Depends(get_backend),
):
    history = await backend.create(
        VaccineHistoryForm(
            vaccine_id=record_id,
            pet_id=payload.pet_id,
            date_administered=payload.date_administered,
            treatment_info=payload.treatment_info,
        )
    )
    for photo in payload.photos:
        await backend.create(
            VaccineHistoryPhotoForm(vaccine_history_id=history.id, type=photo.type, image_url=photo.image_data)
        )

    logger.info("Added history %s to vaccine record %s", history.id, record_id)
    return {"id": history.id, "vaccine_id": record_id, "photos": len(payload.photos)}


# Endpoint: bulk delete.
@router.delete("", summary="Delete vaccine records")
async def delete_vaccine_records(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.VACCINE_RECORDS, payload.ids)
