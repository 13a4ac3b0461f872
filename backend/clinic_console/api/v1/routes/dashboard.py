"""Module: dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clinic_console.api.v1.routes.deps import get_backend
from clinic_console.services import screens
from clinic_console.services.backend import AdminBackend

router = APIRouter()


# Endpoint: totals, chart series and recent activity for the overview page.
@router.get("/stats", summary="Dashboard overview")
async def dashboard_stats(backend: AdminBackend = Depends(get_backend)):
    return await screens.load_dashboard(backend)


# Endpoint: record totals shown as sidebar badges.
@router.get("/sidebar-counts", summary="Sidebar badge counts")
async def sidebar_counts(backend: AdminBackend = Depends(get_backend)):
    return await screens.load_sidebar_counts(backend)
