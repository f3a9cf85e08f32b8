# app/seeders/roles.py
import logging

from sqlmodel import Session, select

from app.models.usuario import Rol

logger = logging.getLogger(__name__)

ROLES = [
    {"nombre": "super_admin", "descripcion": "Super Administrador con acceso completo al sistema"},
    {"nombre": "propietario", "descripcion": "Propietario de negocio con acceso a su empresa"},
    {"nombre": "empleado", "descripcion": "Empleado del negocio con acceso limitado"},
]


def seed_roles(session: Session) -> list[Rol]:
    """Crea los roles del sistema. Los que ya existen se dejan igual."""
    logger.info("📋 Creando roles del sistema...")
    roles = []
    for data in ROLES:
        rol = session.exec(select(Rol).where(Rol.nombre == data["nombre"])).first()
        if rol:
            logger.info(f"⚠️  Rol ya existe: {rol.nombre}")
        else:
            rol = Rol(nombre=data["nombre"], descripcion=data["descripcion"], activo=True)
            session.add(rol)
            session.commit()
            session.refresh(rol)
            logger.info(f"✅ Rol creado: {rol.nombre}")
        roles.append(rol)
    return roles
