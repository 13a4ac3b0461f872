"""Module: notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from clinic_console.api.v1.routes.deps import get_backend
from clinic_console.schemas.forms import BulkNotificationForm
from clinic_console.services import screens
from clinic_console.services.backend import AdminBackend

router = APIRouter()


# Endpoint: upcoming events with owner and pet names resolved.
@router.get("/events", summary="List upcoming events")
async def list_events(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=1000),
    search: str = "",
    backend: AdminBackend = Depends(get_backend),
):
    return await screens.load_events(backend, page, limit, search)


# Endpoint: push the notification for one event to its owner.
@router.post("/events/{event_id}/send", summary="Send event notification")
async def send_event_notification(event_id: str, backend: AdminBackend = Depends(get_backend)):
    return await backend.send_event_notification(event_id)


# Endpoint: custom notification to every registered device.
@router.post("/bulk", summary="Send bulk notification")
async def send_bulk_notification(payload: BulkNotificationForm, backend: AdminBackend = Depends(get_backend)):
    return await backend.send_bulk_notification(payload)
