"""Shared fixtures: an in-memory store, seeded directory rows and an API client."""
import os

# Settings are read at import time
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"

from typing import AsyncGenerator, List

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from healthconnect.db.base import create_tables, get_session_factory
from healthconnect.db.seed import SEED_DOCTORS, seed_doctors
from healthconnect.db.session import clear_global_session_factory, set_global_session_factory
from healthconnect.main import app
from healthconnect.schemas.doctor import DoctorOut


@pytest.fixture
def directory() -> List[DoctorOut]:
    """The seed doctors as plain records, in seed order."""
    return [
        DoctorOut(id=str(i), **row) for i, row in enumerate(SEED_DOCTORS, start=1)
    ]


@pytest_asyncio.fixture
async def engine():
    # one shared connection so every session sees the same in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return await get_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session):
    return await seed_doctors(db_session)


@pytest_asyncio.fixture
async def client(session_factory, seeded) -> AsyncGenerator[httpx.AsyncClient, None]:
    """API client over ASGI; the lifespan is replaced by the fixture store."""
    app.state.session_factory = session_factory
    set_global_session_factory(session_factory)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    clear_global_session_factory()
