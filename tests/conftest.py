import pytest
from httpx import ASGITransport, AsyncClient

from formbuilder.app import create_app
from formbuilder.config import Settings
from formbuilder.models import FormField, Snapshot


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("HISTORY_MAX_SIZE", "50")
    return Settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def field_a():
    return FormField(id="field-a", type="text", label="Name", placeholder="Your name", required=True, order=0)


def make_snapshot(title, fields=None, **kwargs):
    return Snapshot(fields=list(fields or []), title=title, **kwargs)
