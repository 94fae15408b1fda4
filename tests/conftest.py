"""Pytest fixtures and configuration"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)
from sqlalchemy.pool import StaticPool

from vasooly.database import Base, get_db
from vasooly.main import app

# In-memory database shared by every connection of a test's engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    The engine is disposed after the test completes.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def created_bill(client: AsyncClient) -> dict:
    """A ₹100 bill split among three participants"""
    response = await client.post(
        "/api/v1/bills",
        json={
            "title": "Dinner",
            "totalAmountPaise": 10000,
            "category": "FOOD",
            "participants": [
                {"name": "Alice", "phone": "+919800000001"},
                {"name": "Bob"},
                {"name": "Charlie"},
            ],
        },
    )
    assert response.status_code == 201
    return response.json()
