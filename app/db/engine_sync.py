# app/db/engine_sync.py
"""
MOTOR SÍNCRONO - Usado por los servicios de dominio (pagos, usuarios, seeders).
SQLite por defecto, con WAL mode y claves foráneas activadas.
"""
import os
from typing import Generator

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import get_settings

DATABASE_URL_SYNC = get_settings().database_url
_is_sqlite = DATABASE_URL_SYNC.startswith("sqlite")

if _is_sqlite and ":memory:" not in DATABASE_URL_SYNC:
    _db_path = DATABASE_URL_SYNC.split("///", 1)[-1]
    os.makedirs(os.path.dirname(os.path.abspath(_db_path)), exist_ok=True)

_connect_args = {"check_same_thread": False} if _is_sqlite else {}
sync_engine = create_engine(DATABASE_URL_SYNC, echo=False, connect_args=_connect_args)


if _is_sqlite:
    @event.listens_for(sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        # SQLite no valida las FK si no se pide explícitamente
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()


def get_sync_session() -> Generator[Session, None, None]:
    """
    Dependency for SYNC SQLModel session injection.
    Usage: session: Session = Depends(get_sync_session)
    """
    with Session(sync_engine) as session:
        yield session


def create_sync_db_and_tables():
    """Crea todas las tablas registradas en SQLModel.metadata."""
    # Registrar todos los modelos antes de create_all
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(sync_engine)
