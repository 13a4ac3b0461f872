"""Module: users."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from clinic_console.api.v1.routes.deps import BulkDeletePayload, get_backend
from clinic_console.schemas.forms import UserForm
from clinic_console.schemas.records import TableName
from clinic_console.services import screens
from clinic_console.services.backend import AdminBackend

router = APIRouter()


# Endpoint: one page of pet parents with their pet counts.
@router.get("", summary="List users (with pet counts)")
async def list_users(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=1000),
    search: str = "",
    state: str = "all",
    backend: AdminBackend = Depends(get_backend),
):
    filters = screens.UserFilters(search=search, state=state)
    return await screens.load_users(backend, page, limit, filters)


# Endpoint: pets owned by one user.
@router.get("/{user_id}/pets", summary="Pets of a user")
async def user_pets(user_id: str, backend: AdminBackend = Depends(get_backend)):
    pets = await backend.fetch_all(TableName.PETS)
    return [p for p in pets if p.user_id is not None and str(p.user_id) == user_id]


# Endpoint: partial update of a user profile.
@router.put("/{user_id}", summary="Update a user")
async def update_user(user_id: str, payload: UserForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.update(payload, user_id)


# Endpoint: bulk delete.
@router.delete("", summary="Delete users")
async def delete_users(payload: BulkDeletePayload, backend: AdminBackend = Depends(get_backend)):
    return await backend.delete(TableName.USERS, payload.ids)
