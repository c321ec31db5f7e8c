"""Database session and engine configuration."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ojt_tracker.config import settings
from ojt_tracker.db.base import Base


def _engine_options(database_url: str) -> dict:
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    # SQLite (tests, local runs) has no server-side pool to size
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
        )
    return options


# Create async engine
engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Initialize database tables."""
    async with engine.begin() as conn:
        # Import all models to register them
        from ojt_tracker.models import entry, supervisor, user  # noqa: F401

        # Create tables (in production, use Alembic migrations)
        if settings.DEBUG:
            await conn.run_sync(Base.metadata.create_all)
