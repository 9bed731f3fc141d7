"""Shared test fixtures.

Each test gets its own SQLite database file and an application wired to it.
Lifespan events don't run under ``ASGITransport``, so the fixtures attach the
database and image host to ``app.state`` the way start-up would.
"""

import itertools
from urllib.parse import parse_qs

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from courtfinder.core.config import Settings
from courtfinder.core.database import Database
from courtfinder.main import create_app
from courtfinder.services.image_host import ImageHost

SUPER_ADMIN_SECRET = "super-secret-test"
HOSTED_IMAGE_PREFIX = "https://i.ibb.co/test/"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'courts.db'}",
        "super_admin_secret": SUPER_ADMIN_SECRET,
        "image_host_api_key": "test-key",
        "cors_origins": "*",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def fake_image_host_transport() -> httpx.MockTransport:
    """ImgBB stand-in: uploads whose payload contains FAIL get a 400."""
    counter = itertools.count(1)

    def handler(request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode())
        payload = form.get("image", [""])[0]
        if request.url.params.get("key") != "test-key" or "FAIL" in payload:
            return httpx.Response(400, json={"error": {"message": "Invalid image"}})
        return httpx.Response(200, json={"data": {"url": f"{HOSTED_IMAGE_PREFIX}{next(counter)}.png"}})

    return httpx.MockTransport(handler)


async def _build_database(settings: Settings, include_sports: bool = True) -> Database:
    database = Database(settings)
    await database.create_all(include_sports=include_sports)
    await database.connect()
    return database


def _build_app(database: Database):
    application = create_app(database.settings)
    application.state.database = database
    application.state.image_host = ImageHost(
        database.settings,
        client=httpx.AsyncClient(transport=fake_image_host_transport()),
    )
    return application


@pytest.fixture
async def database(tmp_path):
    db = await _build_database(make_settings(tmp_path))
    yield db
    await db.dispose()


@pytest.fixture
async def app(database):
    application = _build_app(database)
    yield application
    await application.state.image_host.aclose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def legacy_client(tmp_path):
    """Client against a schema that only has the venues table."""
    db = await _build_database(make_settings(tmp_path), include_sports=False)
    application = _build_app(db)
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as ac:
        yield ac
    await application.state.image_host.aclose()
    await db.dispose()


@pytest.fixture
def admin_headers():
    return {"X-Admin-Secret": SUPER_ADMIN_SECRET}


@pytest.fixture
def super_admin_secret():
    return SUPER_ADMIN_SECRET


@pytest.fixture
def hosted_image_prefix():
    return HOSTED_IMAGE_PREFIX


@pytest.fixture
def settings_factory(tmp_path):
    """Build test Settings with overrides, e.g. ``settings_factory(image_host_api_key="")``."""
    return lambda **overrides: make_settings(tmp_path, **overrides)
