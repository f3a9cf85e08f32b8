# app/core/users.py
"""
FastAPI Users configuration and authentication setup.
JWT bearer backend, Argon2 hashing and the Usuario manager.
"""
import logging
import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi_users import BaseUserManager, FastAPIUsers, InvalidPasswordException, UUIDIDMixin
from fastapi_users.authentication import AuthenticationBackend, BearerTransport, JWTStrategy
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.password import PasswordHelper
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.engine import get_session
from app.models.usuario import Rol, Usuario

logger = logging.getLogger(__name__)

# --- Configuration ---
_settings = get_settings()
SECRET = _settings.secret_key
ACCESS_TOKEN_LIFETIME_SECONDS = _settings.access_token_lifetime_seconds
PASSWORD_MIN_LENGTH = 8
ROL_POR_DEFECTO = "propietario"

# --- Authentication Transport (Authorization: Bearer <token>) ---
bearer_transport = BearerTransport(tokenUrl="auth/login")


# --- JWT Strategy ---
def get_jwt_strategy() -> JWTStrategy:
    """Returns JWT strategy for token generation and validation"""
    return JWTStrategy(secret=SECRET, lifetime_seconds=ACCESS_TOKEN_LIFETIME_SECONDS)


auth_backend_jwt = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)


# --- Usuario Database Adapter ---
class SQLAlchemyUsuarioDatabase(SQLAlchemyUserDatabase):
    """Adds role lookups to the standard SQLAlchemy adapter."""

    async def get_rol(self, nombre: str) -> Optional[Rol]:
        statement = select(Rol).where(Rol.nombre == nombre)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()


# --- User Manager ---
class UserManager(UUIDIDMixin, BaseUserManager[Usuario, uuid.UUID]):
    """
    Handles usuario lifecycle events.
    New registrations get the "propietario" role.
    """

    reset_password_token_secret = SECRET
    verification_token_secret = SECRET

    async def validate_password(self, password: str, user) -> None:
        if len(password) < PASSWORD_MIN_LENGTH:
            raise InvalidPasswordException(
                reason=f"La contraseña debe tener al menos {PASSWORD_MIN_LENGTH} caracteres"
            )
        if user.email and user.email.lower() in password.lower():
            raise InvalidPasswordException(reason="La contraseña no puede contener el email")

    async def on_after_register(self, user: Usuario, request: Optional[Request] = None):
        if user.rol_id is None:
            rol = await self.user_db.get_rol(ROL_POR_DEFECTO)
            if rol is not None:
                await self.user_db.update(user, {"rol_id": rol.id})
            else:
                logger.warning(f"⚠️ Rol '{ROL_POR_DEFECTO}' no existe; ejecuta los seeders")
        logger.info(f"✅ Usuario registrado: {user.email}")

    async def on_after_login(self, user: Usuario, request: Optional[Request] = None, response=None):
        logger.info(f"🔐 Usuario autenticado: {user.email}")

    async def on_after_forgot_password(
        self, user: Usuario, token: str, request: Optional[Request] = None
    ):
        # El envío del código (email/SMS) lo hace un servicio externo
        logger.info(f"🔑 Código de restablecimiento generado para: {user.email}")

    async def on_after_reset_password(self, user: Usuario, request: Optional[Request] = None):
        logger.info(f"🔑 Contraseña restablecida para: {user.email}")


# --- Dependency Injectors ---
async def get_user_db(session: AsyncSession = Depends(get_session)):
    yield SQLAlchemyUsuarioDatabase(session, Usuario)


# --- Argon2 Password Helper ---
argon2_context = CryptContext(schemes=["argon2"], deprecated="auto")
password_helper = PasswordHelper(argon2_context)


async def get_user_manager(user_db=Depends(get_user_db)):
    """Dependency to get the user manager instance (Argon2 hashing)."""
    yield UserManager(user_db, password_helper)


# --- FastAPI Users Instance ---
fastapi_users = FastAPIUsers[Usuario, uuid.UUID](get_user_manager, [auth_backend_jwt])

# --- Dependency Shortcuts ---
current_active_user = fastapi_users.current_user(active=True)
current_superuser = fastapi_users.current_user(active=True, superuser=True)
