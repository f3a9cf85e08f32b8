# app/seeders/super_admin.py
import logging
import secrets
import uuid

from sqlmodel import Session, select

from app.core.time import utc_now
from app.core.users import password_helper
from app.models.usuario import Rol, Usuario

logger = logging.getLogger(__name__)

PENDING_IDENTITY_PREFIX = "pending:"


def seed_super_admin(session: Session, email: str, nombre: str) -> Usuario:
    """
    Upsert del super administrador.

    - Si el email ya existe, se promueve en el sitio (rol super_admin,
      superusuario, activo, verificado).
    - Si no, se crea con google_id "pending:<uuid>" y una contraseña
      aleatoria que nadie conoce: la cuenta se usa tras el primer inicio
      de sesión externo o tras scripts/update_password.py.

    Raises:
        LookupError: si el rol super_admin no existe (ejecutar seed_roles antes).
    """
    logger.info("Creando Super Administrador...")
    rol = session.exec(select(Rol).where(Rol.nombre == "super_admin")).first()
    if not rol:
        raise LookupError("No se encontró el rol super_admin; ejecuta primero seed_roles")

    usuario = session.exec(select(Usuario).where(Usuario.email == email)).first()
    if usuario:
        logger.info("Usuario ya existe, actualizando a Super Admin...")
        usuario.rol_id = rol.id
        usuario.is_superuser = True
        usuario.is_active = True
        usuario.is_verified = True
        usuario.updated_at = utc_now()
    else:
        usuario = Usuario(
            email=email,
            nombre=nombre,
            hashed_password=password_helper.hash(secrets.token_urlsafe(32)),
            rol_id=rol.id,
            google_id=f"{PENDING_IDENTITY_PREFIX}{uuid.uuid4()}",
            is_superuser=True,
            is_active=True,
            is_verified=True,
        )
        logger.info(f"Super Administrador creado: {email}")

    session.add(usuario)
    session.commit()
    session.refresh(usuario)
    return usuario
