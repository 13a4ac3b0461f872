import httpx
import pytest
from fastapi.testclient import TestClient

from clinic_console.core.config import Settings
from clinic_console.main import create_app
from fake_backend import FakeAdminBackend


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake():
    return FakeAdminBackend()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def client(fake, settings):
    app = create_app(settings, transport=httpx.ASGITransport(app=fake.app))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def backend_http(fake, settings):
    return httpx.AsyncClient(
        base_url=settings.backend_base_url,
        transport=httpx.ASGITransport(app=fake.app),
    )
