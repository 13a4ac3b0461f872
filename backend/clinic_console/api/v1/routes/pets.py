"""Module: pets."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from clinic_console.api.v1.routes.deps import BulkDeletePayload, get_backend
from clinic_console.schemas.forms import PetForm
from clinic_console.schemas.records import TableName
from clinic_console.services import screens
from clinic_console.services.backend import AdminBackend

router = APIRouter()


# Endpoint: one page of pets, searched by name/species/breed and filtered.
@router.get("", summary="List pets")
async def list_pets(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=1000),
    search: str = "",
    type: str = "all",
    gender: str = "all",
    is_neutered: str = Query(default="all", pattern="^(all|yes|no)$"),
    backend: AdminBackend = Depends(get_backend),
):
    filters = screens.PetFilters(search=search, type=type, gender=gender, is_neutered=is_neutered)
    return await screens.load_pets(backend, page, limit, filters)


# Endpoint: breed choices for the edit form, narrowed to one species.
@router.get("/breeds", summary="Breeds for a species")
async def breeds_for_species(
    species: str | None = Query(default=None),
    backend: AdminBackend = Depends(get_backend),
):
    breeds = await backend.fetch_all(TableName.BREEDS)
    if species is None:
        return breeds
    return screens.breeds_for_species(breeds, species)


# Endpoint: partial update of a pet.
@router.put("/{pet_id}", summary="Update a pet")
async def update_pet(pet_id: str, payload: PetForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.update(payload, pet_id)


# Endpoint: bulk delete.
@router.delete("", summary="Delete pets")
async def delete_pets(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.PETS, payload.ids)
