import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-workout-api")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

import workout_api.models  # noqa: F401
from workout_api.config import settings
from workout_api.database import Base, create_db_engine, create_session_factory, get_db
from workout_api.main import app
from workout_api.models.catalog import Exercise, Muscle
from workout_api.models.user import User
from tests.factories import auth_headers, create_user


@pytest.fixture(scope="function")
async def db_engine():
    engine = create_db_engine(
        settings,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def bob(db_session) -> User:
    return await create_user(db_session, name="bob", email="bob@example.com")


@pytest.fixture
async def binky(db_session) -> User:
    return await create_user(db_session, name="binky", email="bad@bunny.com")


@pytest.fixture
async def admin_user(db_session) -> User:
    return await create_user(db_session, name="admin", email="admin@example.com", admin=True)


@pytest.fixture
def bob_headers(bob) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
async def chest(db_session) -> Muscle:
    muscle = Muscle(name="chest")
    db_session.add(muscle)
    await db_session.commit()
    return muscle


@pytest.fixture
async def chest_fly(db_session, chest) -> Exercise:
    exercise = Exercise(name="chest fly", muscle_id=chest.id)
    db_session.add(exercise)
    await db_session.commit()
    return exercise


@pytest.fixture
async def bench_press(db_session, chest) -> Exercise:
    exercise = Exercise(name="bench press", muscle_id=chest.id)
    db_session.add(exercise)
    await db_session.commit()
    return exercise
