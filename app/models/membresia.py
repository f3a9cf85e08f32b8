# app/models/membresia.py
"""
Catálogo de membresías y su asignación a usuarios propietarios.
"""
import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from app.core.time import utc_now


class Membresia(SQLModel, table=True):
    __tablename__ = "membresias"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    nombre: str = Field(unique=True, index=True, nullable=False, max_length=100)
    meses: int = Field(nullable=False)
    precio: float = Field(nullable=False)
    activa: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)


class MembresiaUsuario(SQLModel, table=True):
    __tablename__ = "membresias_usuarios"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    usuario_id: uuid.UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    membresia_id: uuid.UUID = Field(foreign_key="membresias.id", nullable=False, index=True)
    fecha_inicio: datetime = Field(nullable=False)
    fecha_expiracion: datetime = Field(nullable=False)
    activa: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)
