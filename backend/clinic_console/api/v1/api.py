"""Module: api."""

# backend/clinic_console/api/v1/api.py
from fastapi import APIRouter

# Operational routes.
from clinic_console.api.v1.routes.health import router as health_router

# Screen routes consumed by the admin console UI.
from clinic_console.api.v1.routes.dashboard import router as dashboard_router
from clinic_console.api.v1.routes.appointments import router as appointments_router
from clinic_console.api.v1.routes.pets import router as pets_router
from clinic_console.api.v1.routes.users import router as users_router
from clinic_console.api.v1.routes.medical_records import router as medical_records_router
from clinic_console.api.v1.routes.vaccine_records import router as vaccine_records_router
from clinic_console.api.v1.routes.notifications import router as notifications_router
from clinic_console.api.v1.routes.catalog import router as catalog_router
from clinic_console.api.v1.routes.slots import router as slots_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, tags=["health"])

# Register screen endpoints.
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(medical_records_router, prefix="/medical-records", tags=["medical-records"])
api_router.include_router(vaccine_records_router, prefix="/vaccine-records", tags=["vaccine-records"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])
api_router.include_router(catalog_router, prefix="/catalog", tags=["catalog"])
api_router.include_router(slots_router, prefix="/slots", tags=["slots"])
