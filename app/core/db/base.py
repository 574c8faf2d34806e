"""Async engine, session factory and declarative base shared by every table."""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings
from app.core.logging import get_logger


logger = get_logger(__name__)

Base = declarative_base()

connection_string = str(settings.postgres.connection_string)

engine = create_async_engine(
    connection_string,
    echo=settings.app.sql_echo,
    pool_pre_ping=True,
)

# Routes keep using ORM objects after commit (e.g. when building responses)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Request-scoped session; commits on success, rolls back on any error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Session rolled back: %s: %s", type(e).__name__, e)
            raise


async def dispose_engine() -> None:
    await engine.dispose()
    logger.info("Database engine disposed")
