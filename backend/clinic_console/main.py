"""Module: main."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic_console.api.v1.api import api_router
from clinic_console.core.config import Settings, get_settings
from clinic_console.core.errors import ConsoleError
from clinic_console.core.logging import configure_logging
from clinic_console.services.backend import build_http_client
from clinic_console.services.slots import SlotToggleGuard


def create_app(settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One connection pool and one toggle guard per process.
        app.state.http = build_http_client(settings, transport=transport)
        app.state.slot_guard = SlotToggleGuard()
        try:
            yield
        finally:
            await app.state.http.aclose()

    app = FastAPI(title="Clinic Admin Console API", version="0.1.0", lifespan=lifespan)
    app.dependency_overrides[get_settings] = lambda: settings

    app.include_router(api_router, prefix="/api/v1")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ConsoleError)
    async def console_error_handler(request: Request, exc: ConsoleError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    return app


app = create_app()
