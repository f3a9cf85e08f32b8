# app/seeders/__init__.py
"""
Seeders idempotentes: se pueden ejecutar varias veces sin duplicar datos.

Usage:
    python -m app.seeders
"""
import logging

from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.core.config import get_settings

from .membresias import seed_membresias
from .roles import seed_roles
from .super_admin import seed_super_admin

logger = logging.getLogger(__name__)


def run_all_seeders(engine: Engine) -> None:
    """Ejecuta todos los seeders con una sesión que se cierra al terminar."""
    settings = get_settings()
    logger.info("Ejecutando inicialización completa de la base de datos...")
    with Session(engine) as session:
        seed_roles(session)
        seed_super_admin(session, settings.super_admin_email, settings.super_admin_nombre)
        seed_membresias(session)
    logger.info("Base de datos inicializada completamente")


__all__ = ["run_all_seeders", "seed_roles", "seed_super_admin", "seed_membresias"]
