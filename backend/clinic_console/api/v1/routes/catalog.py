"""Module: catalog.

Reference lists managed from the settings screen: vaccine types, vaccine
names and breeds. All three share the same list/create/update/delete shape.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clinic_console.api.v1.routes.deps import BulkDeletePayload, get_backend
from clinic_console.schemas.forms import BreedForm, VaccineNameForm, VaccineTypeForm
from clinic_console.schemas.records import TableName
from clinic_console.services.backend import AdminBackend

router = APIRouter()


# -------------------------
# Vaccine types
# -------------------------
@router.get("/vaccine-types", summary="List vaccine types")
async def list_vaccine_types(backend: AdminBackend = Depends(get_backend)):
    return await backend.fetch_all(TableName.VACCINE_TYPES)


@router.post("/vaccine-types", summary="Create a vaccine type")
async def create_vaccine_type(payload: VaccineTypeForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.create(payload)


@router.put("/vaccine-types/{record_id}", summary="Update a vaccine type")
async def update_vaccine_type(
    record_id: str, payload: VaccineTypeForm, backend: AdminBackend = Depends(get_backend)
):
    return await backend.update(payload, record_id)


@router.delete("/vaccine-types", summary="Delete vaccine types")
async def delete_vaccine_types(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.VACCINE_TYPES, payload.ids)


# -------------------------
# Vaccine names
# -------------------------
@router.get("/vaccine-names", summary="List vaccine names")
async def list_vaccine_names(backend: AdminBackend = Depends(get_backend)):
    return await backend.fetch_all(TableName.VACCINE_NAMES)


@router.post("/vaccine-names", summary="Create a vaccine name")
async def create_vaccine_name(payload: VaccineNameForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.create(payload)


@router.put("/vaccine-names/{record_id}", summary="Update a vaccine name")
async def update_vaccine_name(
    record_id: str, payload: VaccineNameForm, backend: AdminBackend = Depends(get_backend)
):
    return await backend.update(payload, record_id)


@router.delete("/vaccine-names", summary="Delete vaccine names")
async def delete_vaccine_names(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.VACCINE_NAMES, payload.ids)


# -------------------------
# Breeds
# -------------------------
@router.get("/breeds", summary="List breeds")
async def list_breeds(backend: AdminBackend = Depends(get_backend)):
    return await backend.fetch_all(TableName.BREEDS)


@router.post("/breeds", summary="Create a breed")
async def create_breed(payload: BreedForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.create(payload)


@router.put("/breeds/{record_id}", summary="Update a breed")
async def update_breed(record_id: str, payload: BreedForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.update(payload, record_id)


@router.delete("/breeds", summary="Delete breeds")
async def delete_breeds(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.BREEDS, payload.ids)
