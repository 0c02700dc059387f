import os
import sys
from pathlib import Path

import pytest
from passlib.context import CryptContext

ADMIN_PASSWORD = "correct horse battery staple"

# Ensure required environment variables are present before settings import
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOGIN_RATE", "1000/minute")
os.environ.setdefault(
    "ADMIN_PASSWORD_HASH",
    CryptContext(schemes=["bcrypt"], bcrypt__rounds=4).hash(ADMIN_PASSWORD),
)

# Add the backend directory so `storefront` package imports resolve during tests
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.append(str(BACKEND_DIR))

from httpx import ASGITransport, AsyncClient  # noqa: E402

from storefront.core.config import settings  # noqa: E402
from storefront.core.db import build_engine, build_session_factory  # noqa: E402
from storefront.core.security import create_access_token  # noqa: E402
from storefront.models import Base  # noqa: E402
from storefront.services.settings_store import SettingsStore  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(anyio_backend):
    engine = build_engine(settings.model_copy(update={"DB_URL": "sqlite+aiosqlite://"}))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return SettingsStore(session_factory)


@pytest.fixture
async def client(engine, anyio_backend):
    from storefront.main import create_app

    app = create_app(engine)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token({'sub': 'admin'})}"}
