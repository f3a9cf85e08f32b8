"""
Cambia la contraseña de un usuario existente desde la terminal.

Usage:
    python scripts/update_password.py --email admin@feelinpay.com
    python scripts/update_password.py --email admin@feelinpay.com --password 'nueva-clave'
"""
import argparse
import getpass
import logging
import os
import sys

# Ensure we can import from app
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlmodel import Session

from app.core.config import configure_logging
from app.core.errors import NotFoundError
from app.db.engine_sync import sync_engine
from app.services.user_service import UserService

logger = logging.getLogger("update_password")

MIN_PASSWORD_LENGTH = 8


def update_password(email: str, password: str) -> bool:
    with Session(sync_engine) as session:
        try:
            UserService(session).update_password(email, password)
        except NotFoundError:
            logger.error(f"❌ No existe ningún usuario con email {email}")
            return False
    logger.info(f"✅ Contraseña actualizada exitosamente para {email}")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Actualizar la contraseña de un usuario")
    parser.add_argument("--email", required=True, help="Email del usuario")
    parser.add_argument("--password", help="Nueva contraseña (si se omite se pide por consola)")
    args = parser.parse_args(argv)

    configure_logging()
    password = args.password or getpass.getpass("Nueva contraseña: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        logger.error(f"❌ La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres")
        return 1

    return 0 if update_password(args.email, password) else 1


if __name__ == "__main__":
    sys.exit(main())
