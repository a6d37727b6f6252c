"""Shared fixtures: in-memory SQLite database, sessions, seeded users."""

import asyncio
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.shared.models import Base, User
from src.shared.repositories.user_repository import UserRepository
from src.shared.schemas.user import UserCreate


class FakeIdentityProvider:
    """Records created accounts instead of calling Keycloak."""

    def __init__(self, default_role: str = "default-roles-troop"):
        self.default_role = default_role
        self.created: list[tuple[UUID, UserCreate]] = []

    async def create_user(self, registration: UserCreate) -> UUID:
        user_id = uuid4()
        self.created.append((user_id, registration))
        return user_id

    async def get_default_role(self) -> str:
        return self.default_role


class GatedIdentityProvider(FakeIdentityProvider):
    """Holds every create_user call until `parties` callers have arrived."""

    def __init__(self, parties: int):
        super().__init__()
        self.parties = parties
        self._all_arrived = asyncio.Event()

    async def create_user(self, registration: UserCreate) -> UUID:
        user_id = await super().create_user(registration)
        if len(self.created) >= self.parties:
            self._all_arrived.set()
        await self._all_arrived.wait()
        return user_id


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def gated_identity_provider():
    return GatedIdentityProvider(parties=2)


@pytest.fixture
def make_user(session):
    """Factory that stores a user and returns it."""

    async def _make_user(username: str, email: str | None = None) -> User:
        return await UserRepository(session).create(
            id=uuid4(),
            username=username,
            email=email or f"{username}@example.com",
            roles=["default-roles-troop"],
        )

    return _make_user


@pytest_asyncio.fixture
async def alice(make_user):
    return await make_user("alice")


@pytest_asyncio.fixture
async def bob(make_user):
    return await make_user("bob")


@pytest_asyncio.fixture
async def carol(make_user):
    return await make_user("carol")


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """File-backed database so concurrent sessions use separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'troop.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(file_engine):
    return async_sessionmaker(
        bind=file_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
