"""Pytest configuration and fixtures for the test suite."""

import os

# Settings are read at import time; provide a complete test environment first.
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_DB_PORT", "5432")
os.environ.setdefault("POSTGRES_DB_NAME", "flashdeck_test")
os.environ.setdefault("POSTGRES_DB_USER", "flashdeck")
os.environ.setdefault("POSTGRES_DB_PASSWORD", "flashdeck")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("MODE", "test")
os.environ.setdefault("MODEL_PROVIDER", "gemini")

from typing import AsyncIterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.db.base import Base, get_session  # noqa: E402
from app.core.db.schemas import Card, Deck, User  # noqa: E402
from app.modules.auth import current_active_user  # noqa: E402
from app.modules.cards import generate_id  # noqa: E402


@pytest_asyncio.fixture
async def session_maker(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """SQLite-backed session factory with the full schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as s:
        yield s


async def _add_user(session_maker, email: str) -> User:
    async with session_maker() as s:
        user = User(
            email=email,
            hashed_password="not-a-real-hash",
            is_active=True,
            is_superuser=False,
            is_verified=True,
        )
        s.add(user)
        await s.commit()
        await s.refresh(user)
        return user


@pytest_asyncio.fixture
async def user(session_maker) -> User:
    return await _add_user(session_maker, "owner@example.com")


@pytest_asyncio.fixture
async def other_user(session_maker) -> User:
    return await _add_user(session_maker, "intruder@example.com")


@pytest.fixture
def make_deck(session_maker):
    """Create a deck (optionally with cards) directly in the database."""

    async def _make(
        owner: User,
        title: str = "Spanish basics",
        description: str = "",
        cards: list[tuple[str, str]] | None = None,
    ) -> Deck:
        async with session_maker() as s:
            deck = Deck(user_id=owner.id, title=title, description=description)
            s.add(deck)
            await s.flush()
            for front, back in cards or []:
                s.add(Card(deck_id=deck.id, public_id=generate_id(), front=front, back=back))
            await s.commit()
            await s.refresh(deck)
            return deck

    return _make


@pytest_asyncio.fixture
async def client(session_maker, user) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client bound to the app with DB and auth dependencies overridden."""
    from main import create_app

    app = create_app()

    async def _get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[current_active_user] = lambda: user

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
