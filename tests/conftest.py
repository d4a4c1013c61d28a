import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.main import app
from app.models import Base
from app.routers.geocode import geocode_rate_limit

async def no_rate_limit():
    return None

@pytest_asyncio.fixture
async def session_maker():
    # One shared connection so every session sees the same in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()

@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session

@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[geocode_rate_limit] = no_rate_limit
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides = {}

@pytest_asyncio.fixture
async def row_count(session_maker):
    async def count(model) -> int:
        async with session_maker() as session:
            return (await session.execute(select(func.count()).select_from(model))).scalar_one()
    return count
