import os

# Settings are read at import time; point them at throwaway values first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dubvault.core.security import get_password_hash
from dubvault.main import app
from dubvault.models.rating import Rating  # noqa: F401  registers the table
from dubvault.models.track import Track, TrackStatus
from dubvault.models.user import User
from dubvault.services.catalog import build_track
from dubvault.services.database import Base, get_db
from dubvault.services.repository import TrackRepository

from helpers import TEST_PASSWORD


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dubvault.db'}")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_user(db_session) -> Callable[..., Awaitable[User]]:
    async def _make_user(username: str, is_admin: bool = False) -> User:
        user = User(username=username, password_hash=get_password_hash(TEST_PASSWORD), is_admin=is_admin)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_track(db_session) -> Callable[..., Awaitable[Track]]:
    async def _make_track(title: str, status: TrackStatus = TrackStatus.APPROVED, owner: User | None = None, **kwargs) -> Track:
        track = build_track(
            title=title,
            file_path=kwargs.pop("file_path", f"{title.lower().replace(' ', '_')}.mp3"),
            status=status,
            owner_id=owner.id if owner else None,
            **kwargs,
        )
        return await TrackRepository(db_session).add_track(track)

    return _make_track
