"""Utilidades de tiempo. Todas las marcas se guardan como UTC sin tzinfo."""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Fecha/hora actual en UTC, naive (compatible con SQLite)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convierte un datetime con zona horaria a UTC naive; los naive se asumen UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
