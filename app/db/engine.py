# app/db/engine.py
"""
SQLModel async engine and session management for FastAPI Users integration.
Uses AsyncSession for compatibility with fastapi-users-db-sqlalchemy.
The URL is derived from the same DATABASE_URL as the sync engine.
"""
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import get_settings

_settings = get_settings()
DATABASE_URL = _settings.async_database_url

_connect_args = {"check_same_thread": False} if _settings.is_sqlite else {}
# SQLite: una conexión por sesión, sin pool compartido entre event loops
_pool_args = {"poolclass": NullPool} if _settings.is_sqlite else {}
engine = create_async_engine(
    DATABASE_URL, echo=False, connect_args=_connect_args, **_pool_args
)


if _settings.is_sqlite:
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()

# Create session maker
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for async SQLModel session injection.
    Usage: session: AsyncSession = Depends(get_session)
    """
    async with async_session_maker() as session:
        yield session
