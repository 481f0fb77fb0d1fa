import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings

# No redis in tests
settings.RATE_LIMIT_ENABLED = False

from app.db import Database  # noqa: E402
from app.dependencies.auth import get_current_admin  # noqa: E402
from app.main import app  # noqa: E402

MOCK_ADMIN = {"id": 1, "role": "ADMIN"}


async def override_get_current_admin():
    return MOCK_ADMIN


@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.create_all()
    app.state.db = database
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def session(db):
    async with db.sessionmaker() as session:
        yield session


@pytest.fixture
def admin_override():
    app.dependency_overrides[get_current_admin] = override_get_current_admin
    yield
    app.dependency_overrides.pop(get_current_admin, None)


@pytest_asyncio.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
