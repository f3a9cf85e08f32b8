# app/models/pago.py
"""
Pago model: one recorded transaction tied to a business owner (propietario).

Fields:
- id: UUID primary key, generated on insert
- usuario_id: owner, foreign key to usuarios.id (never changes)
- nombre_pagador: payer name as typed by a human
- monto: amount, 0 < monto <= 999999.99
- fecha: transaction timestamp supplied by the caller
- codigo_seguridad: optional 6-digit code, unique when present
- registrado_en_sheets / notificado_empleados: processing flags
- numero_telefono / mensaje_original: provenance for messaging-channel payments
- created_at / updated_at / procesado_at: audit timestamps
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel

from app.core.time import utc_now

MONTO_MAXIMO = 999999.99


class Pago(SQLModel, table=True):
    __tablename__ = "pagos"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    usuario_id: uuid.UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    nombre_pagador: str = Field(nullable=False, max_length=100)
    monto: float = Field(nullable=False)
    fecha: datetime = Field(nullable=False, index=True)
    codigo_seguridad: str | None = Field(default=None, unique=True, max_length=6)
    registrado_en_sheets: bool = Field(default=False, nullable=False)
    notificado_empleados: bool = Field(default=False, nullable=False)

    numero_telefono: str | None = Field(default=None, max_length=15)
    mensaje_original: str | None = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)
    procesado_at: datetime | None = Field(default=None)

    # Relaciones (comentadas para evitar imports circulares)
    # propietario: Optional["Usuario"] = Relationship()


# --- DTOs ---
class PagoCreate(SQLModel):
    """Campos aceptados al crear un pago."""

    usuario_id: uuid.UUID
    nombre_pagador: str
    monto: float
    fecha: datetime
    codigo_seguridad: str | None = None
    numero_telefono: str | None = None
    mensaje_original: str | None = None


class PagoUpdate(SQLModel):
    """
    Subconjunto mutable de un pago. Los campos no enviados quedan igual;
    usuario_id e id no forman parte del DTO.
    """

    nombre_pagador: str | None = None
    monto: float | None = None
    fecha: datetime | None = None
    codigo_seguridad: str | None = None
    registrado_en_sheets: bool | None = None
    notificado_empleados: bool | None = None
    procesado_at: datetime | None = None


@dataclass
class PagoFiltros:
    search: str | None = None
    desde: datetime | None = None
    hasta: datetime | None = None


@dataclass
class PagoPage:
    pagos: list[Pago] = field(default_factory=list)
    total: int = 0


class PagoStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = 0
    monto_total: float = 0.0
    promedio: float = 0.0


class PagoRead(BaseModel):
    """Representación de un pago en las respuestas de la API."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: uuid.UUID
    usuario_id: uuid.UUID
    nombre_pagador: str
    monto: float
    fecha: datetime
    codigo_seguridad: str | None = None
    registrado_en_sheets: bool
    notificado_empleados: bool
    numero_telefono: str | None = None
    mensaje_original: str | None = None
    created_at: datetime
    updated_at: datetime
    procesado_at: datetime | None = None
