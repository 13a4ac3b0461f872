"""Module: deps."""

from fastapi import Depends, Request
from pydantic import BaseModel, Field

from clinic_console.core.config import Settings, get_settings
from clinic_console.schemas.records import RecordId
from clinic_console.services.backend import AdminBackend
from clinic_console.services.slots import SlotService


# Dependency provider: backend client bound to the shared HTTP connection pool.
def get_backend(request: Request, settings: Settings = Depends(get_settings)) -> AdminBackend:
    return AdminBackend(request.app.state.http, settings)


def get_slot_service(
    request: Request,
    backend: AdminBackend = Depends(get_backend),
    settings: Settings = Depends(get_settings),
) -> SlotService:
    return SlotService(backend, request.app.state.slot_guard, settings.whole_day_policy)


# Shared body for the bulk-delete endpoints of every screen.
class BulkDeletePayload(BaseModel):
    ids: list[RecordId] = Field(min_length=1)
