"""Async SQLAlchemy session factory helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ecom_api.infrastructure.db.metadata import metadata


def create_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Create a reusable async session factory for the provided database URL."""

    engine = create_async_engine(database_url)
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Create missing tables for the application metadata; existing tables are kept."""

    async with session_factory() as session:
        connection = await session.connection()
        await connection.run_sync(metadata.create_all)
        await session.commit()


async def dispose_session_factory(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Close pooled connections held by the engine behind a session factory."""

    engine = session_factory.kw.get("bind")
    if engine is not None:
        await engine.dispose()
