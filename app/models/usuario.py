# app/models/usuario.py
"""
Rol and Usuario models.
Usuario combines the FastAPI Users base fields with the back-office fields.
"""

import uuid as uuid_pkg
from datetime import datetime

from sqlmodel import Field, SQLModel

from app.core.time import utc_now


class Rol(SQLModel, table=True):
    """
    Catálogo de roles del sistema (super_admin, propietario, empleado).
    """

    __tablename__ = "roles"

    id: uuid_pkg.UUID = Field(default_factory=uuid_pkg.uuid4, primary_key=True, nullable=False)
    nombre: str = Field(unique=True, index=True, nullable=False, max_length=50)
    descripcion: str = Field(default="", max_length=255)
    activo: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)


class Usuario(SQLModel, table=True):
    """
    Usuario model.

    FastAPI Users required fields:
    - id: UUID (primary key)
    - email: str (unique, indexed)
    - hashed_password: str
    - is_active / is_superuser / is_verified: bool

    Back-office fields:
    - nombre, telefono
    - rol_id: reference to roles.id (None until a role is assigned)
    - google_id: external identity; may hold a "pending:" placeholder
      until the first external sign-in
    """

    __tablename__ = "usuarios"

    # FastAPI Users required fields
    id: uuid_pkg.UUID = Field(default_factory=uuid_pkg.uuid4, primary_key=True, nullable=False)
    email: str = Field(unique=True, index=True, nullable=False, max_length=320)
    hashed_password: str = Field(nullable=False, max_length=1024)
    is_active: bool = Field(default=True, nullable=False)
    is_superuser: bool = Field(default=False, nullable=False)
    is_verified: bool = Field(default=False, nullable=False)

    # Custom fields
    nombre: str = Field(default="", max_length=100)
    telefono: str | None = Field(default=None, max_length=20)
    rol_id: uuid_pkg.UUID | None = Field(default=None, foreign_key="roles.id", index=True)
    google_id: str | None = Field(default=None, unique=True, max_length=100)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)

    @property
    def disabled(self) -> bool:
        return not self.is_active
