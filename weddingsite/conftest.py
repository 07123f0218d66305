import asyncio
from contextlib import asynccontextmanager
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

# every ORM module has to be imported so the metadata knows all tables
import weddingsite.guests.repository.orm_models  # noqa: F401
import weddingsite.messages.orm_models  # noqa: F401
import weddingsite.photos.orm_models  # noqa: F401
from weddingsite.auth.dependencies import require_admin
from weddingsite.auth.dtos import UserDTO
from weddingsite.config.database import engine
from weddingsite.email_service.tests.inmemory_email_service import InMemoryEmailService
from weddingsite.main import app
from weddingsite.models import BaseModel
from weddingsite.photos.storage import LocalPhotoStorage

ADMIN_USER = UserDTO(id=uuid4(), email="admin@example.com", role="admin")


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
        await conn.run_sync(BaseModel.metadata.create_all)
    await engine.dispose()


async def _delete_all_rows() -> None:
    async with engine.begin() as conn:
        for table in reversed(BaseModel.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest.fixture(scope="session", autouse=True)
def database_schema():
    """Create a fresh schema in the test database once per run."""
    asyncio.run(_reset_schema())
    yield


@pytest.fixture
async def clean_database():
    """For tests that go through the real models and commit."""
    await _delete_all_rows()
    yield
    await _delete_all_rows()


@pytest.fixture
def admin_user() -> UserDTO:
    return ADMIN_USER


@pytest.fixture
def email_service() -> InMemoryEmailService:
    return InMemoryEmailService()


@pytest.fixture
def photo_storage(tmp_path) -> LocalPhotoStorage:
    return LocalPhotoStorage(root=tmp_path / "media", base_url="/media")


@pytest.fixture
def client_factory():
    """Build an HTTP client against the app with dependency overrides.

    Admin-only routes are unlocked unless `as_admin=False` is passed.
    """

    @asynccontextmanager
    async def _client_factory(overrides: dict | None = None, as_admin: bool = True):
        app.dependency_overrides.clear()
        if as_admin:
            app.dependency_overrides[require_admin] = lambda: ADMIN_USER
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return _client_factory
