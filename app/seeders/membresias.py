# app/seeders/membresias.py
import logging
from datetime import timedelta

from sqlmodel import Session, select

from app.core.time import utc_now
from app.models.membresia import Membresia, MembresiaUsuario
from app.models.usuario import Rol, Usuario

logger = logging.getLogger(__name__)

CATALOGO = [
    {"nombre": "Membresía Básica", "precio": 15.00, "meses": 1},
    {"nombre": "Membresía Crece", "precio": 80.00, "meses": 6},
    {"nombre": "Membresía Premium", "precio": 150.00, "meses": 12},
]

DIAS_POR_MES = 30


def seed_catalogo(session: Session) -> list[Membresia]:
    """Catálogo de membresías; se actualiza por nombre, nunca se duplica."""
    membresias = []
    for data in CATALOGO:
        membresia = session.exec(select(Membresia).where(Membresia.nombre == data["nombre"])).first()
        if membresia:
            membresia.precio = data["precio"]
            membresia.meses = data["meses"]
            membresia.activa = True
            membresia.updated_at = utc_now()
        else:
            membresia = Membresia(**data, activa=True)
        session.add(membresia)
        membresias.append(membresia)
    session.commit()
    for membresia in membresias:
        session.refresh(membresia)
    return membresias


def seed_membresias(session: Session, max_asignaciones: int = 3) -> list[MembresiaUsuario]:
    """
    Catálogo + asignaciones de ejemplo a los primeros `max_asignaciones`
    propietarios que todavía no tienen ninguna membresía.
    """
    logger.info("Iniciando seeder de membresías...")
    catalogo = seed_catalogo(session)

    rol = session.exec(select(Rol).where(Rol.nombre == "propietario")).first()
    if not rol:
        logger.warning("⚠️ Rol propietario no encontrado; no se asignan membresías")
        return []

    propietarios = session.exec(
        select(Usuario).where(Usuario.rol_id == rol.id).order_by(Usuario.created_at, Usuario.id)
    ).all()

    asignadas = []
    for usuario in propietarios:
        if len(asignadas) >= max_asignaciones:
            break
        existente = session.exec(
            select(MembresiaUsuario).where(MembresiaUsuario.usuario_id == usuario.id)
        ).first()
        if existente:
            continue

        membresia = catalogo[len(asignadas) % len(catalogo)]
        inicio = utc_now()
        asignacion = MembresiaUsuario(
            usuario_id=usuario.id,
            membresia_id=membresia.id,
            fecha_inicio=inicio,
            fecha_expiracion=inicio + timedelta(days=DIAS_POR_MES * membresia.meses),
            activa=True,
        )
        session.add(asignacion)
        asignadas.append(asignacion)
        logger.info(f"✅ {membresia.nombre} asignada a {usuario.email}")

    session.commit()
    logger.info("Seeder de membresías completado exitosamente")
    return asignadas
