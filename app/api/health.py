from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.db.engine_sync import sync_engine

router = APIRouter()


@router.get("/health", tags=["System"])
def get_system_health():
    """
    Returns the system health status including database connectivity.
    """
    try:
        with sync_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "error"

    return {"status": "ok" if database == "ok" else "degraded", "database": database}
