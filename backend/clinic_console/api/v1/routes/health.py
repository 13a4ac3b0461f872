"""Module: health."""

from fastapi import APIRouter, Depends

from clinic_console.core.config import Settings, get_settings

router = APIRouter()


# Endpoint: lightweight health probe for service liveness.
@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "backend": settings.backend_base_url,
        "whole_day_policy": settings.whole_day_policy.value,
    }
