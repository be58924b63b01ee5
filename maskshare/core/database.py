"""
Document store connection and session management.

The engine and session factory are built once in the application lifespan and
kept on ``app.state``; handlers receive sessions through the ``get_db``
dependency instead of importing a module-level engine.
"""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from maskshare.config import settings


def create_engine(url: str | None = None, **overrides: Any) -> AsyncEngine:
    """
    Create the async engine for the document store.

    Pool sizing only applies to server databases; SQLite URLs (tests, local
    experiments) get SQLAlchemy's default pool for the driver.
    """
    url = url or settings.DATABASE_URL
    kwargs: dict[str, Any] = {"echo": settings.DB_ECHO}
    if not url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before using
            pool_recycle=3600,  # Recycle connections every hour (MariaDB wait_timeout is 8 hours)
        )
    kwargs.update(overrides)
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the async session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables registered on SQLModel.metadata."""
    # Register every table with the metadata before create_all
    import maskshare.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.

    Handlers commit explicitly; anything left uncommitted when the request
    fails is rolled back here.

    Usage in FastAPI:
        @router.get("/items")
        async def read_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
