# app/schemas/pago.py
"""
Esquemas de validación de pagos.

Cada punto de entrada recibe datos sin tipar (por ejemplo el JSON de una
petición) y devuelve un modelo tipado y normalizado, o lanza
app.core.errors.ValidationError con la lista de campos rechazados.
Los nombres de campo del JSON van en camelCase (nombrePagador, startDate...).
"""
import math
import re
import uuid
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import FieldError, ValidationError
from app.core.time import to_naive_utc
from app.models.pago import MONTO_MAXIMO, PagoCreate, PagoFiltros, PagoUpdate

NOMBRE_RE = re.compile(r"[a-zA-ZáéíóúÁÉÍÓÚñÑ\s]+")
CODIGO_RE = re.compile(r"[0-9]+")
TELEFONO_RE = re.compile(r"[0-9+\-\s()]+")
ENTERO_RE = re.compile(r"[0-9]+")
UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")

LIMITE_MAXIMO = 100
PAGINA_DEFECTO = 1
LIMITE_DEFECTO = 20
# OFFSET = (page - 1) * limit debe caber en un entero de 64 bits
OFFSET_MAXIMO = 2**63 - 1
PAGINA_MAXIMA = OFFSET_MAXIMO // LIMITE_MAXIMO + 1


# --- Reglas reutilizables ---
def _parse_fecha(value: Any, mensaje: str = "Formato de fecha inválido") -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    # Solo fecha-hora ISO 8601 completa ("2024-05-01T10:00:00Z")
    elif not isinstance(value, str) or "T" not in value:
        raise ValueError(mensaje)
    else:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (ValueError, OverflowError):
            raise ValueError(mensaje) from None
    # La conversión a UTC puede salirse del rango de datetime (año 1 / 9999)
    try:
        return to_naive_utc(parsed)
    except OverflowError:
        raise ValueError(mensaje) from None


def _parse_entero(value: Any, defecto: int, mensaje: str) -> int:
    if value is None or value == "":
        return defecto
    if isinstance(value, bool):
        raise ValueError(mensaje)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and ENTERO_RE.fullmatch(value):
        return int(value)
    raise ValueError(mensaje)


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class _PagoCampos(_Schema):
    """Campos comunes a creación y actualización; todos opcionales aquí."""

    nombre_pagador: str | None = None
    monto: float | None = None
    fecha: datetime | None = None
    codigo_seguridad: str | None = None

    @field_validator("nombre_pagador", mode="before")
    @classmethod
    def validar_nombre(cls, v):
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("El nombre del pagador debe ser texto")
        if len(v) < 2:
            raise ValueError("El nombre del pagador debe tener al menos 2 caracteres")
        if len(v) > 100:
            raise ValueError("El nombre del pagador no puede exceder 100 caracteres")
        if not NOMBRE_RE.fullmatch(v):
            raise ValueError("El nombre solo puede contener letras y espacios")
        return v

    @field_validator("monto", mode="before")
    @classmethod
    def validar_monto(cls, v):
        if v is None:
            return v
        if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
            raise ValueError("El monto debe ser un número")
        v = float(v)
        if not math.isfinite(v):
            raise ValueError("El monto debe ser un número")
        if v <= 0:
            raise ValueError("El monto debe ser mayor a 0")
        if v > MONTO_MAXIMO:
            raise ValueError("El monto no puede exceder 999,999.99")
        return v

    @field_validator("fecha", mode="before")
    @classmethod
    def validar_fecha(cls, v):
        return _parse_fecha(v)

    @field_validator("codigo_seguridad", mode="before")
    @classmethod
    def validar_codigo(cls, v):
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("El código de seguridad debe ser texto")
        if len(v) != 6:
            raise ValueError("El código de seguridad debe tener 6 dígitos")
        if not CODIGO_RE.fullmatch(v):
            raise ValueError("El código de seguridad solo puede contener números")
        return v


class PagoCreateIn(_PagoCampos):
    nombre_pagador: str
    monto: float
    fecha: datetime
    numero_telefono: str | None = None
    mensaje_original: str | None = None

    @field_validator("numero_telefono", mode="before")
    @classmethod
    def validar_telefono(cls, v):
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("Formato de teléfono inválido")
        if len(v) < 9:
            raise ValueError("El número de teléfono debe tener al menos 9 dígitos")
        if len(v) > 15:
            raise ValueError("El número de teléfono no puede exceder 15 dígitos")
        if not TELEFONO_RE.fullmatch(v):
            raise ValueError("Formato de teléfono inválido")
        return v

    def to_dto(self, usuario_id: uuid.UUID) -> PagoCreate:
        return PagoCreate(usuario_id=usuario_id, **self.model_dump())


class PagoUpdateIn(_PagoCampos):
    def to_dto(self) -> PagoUpdate:
        # null explícito = sin cambios
        return PagoUpdate(**self.model_dump(exclude_none=True))


class _RangoFechas(_Schema):
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validar_rango(cls, v):
        return _parse_fecha(v, "Formato de fecha inválido (ISO 8601)")


class PagoListQuery(_RangoFechas):
    page: int = PAGINA_DEFECTO
    limit: int = LIMITE_DEFECTO
    search: str | None = None

    @field_validator("page", mode="before")
    @classmethod
    def validar_page(cls, v):
        page = _parse_entero(v, PAGINA_DEFECTO, "La página debe ser un número")
        if page <= 0:
            raise ValueError("La página debe ser mayor a 0")
        if page > PAGINA_MAXIMA:
            raise ValueError("La página excede el máximo permitido")
        return page

    @field_validator("limit", mode="before")
    @classmethod
    def validar_limit(cls, v):
        limit = _parse_entero(v, LIMITE_DEFECTO, "El límite debe ser un número")
        if not 0 < limit <= LIMITE_MAXIMO:
            raise ValueError("El límite debe estar entre 1 y 100")
        return limit

    @field_validator("search", mode="before")
    @classmethod
    def validar_search(cls, v):
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("La búsqueda debe ser texto")
        return v.strip() or None

    def filtros(self) -> PagoFiltros:
        return PagoFiltros(search=self.search, desde=self.start_date, hasta=self.end_date)


class PagoStatsQuery(_RangoFechas):
    propietario_id: uuid.UUID | None = None

    @field_validator("propietario_id", mode="before")
    @classmethod
    def validar_propietario(cls, v):
        if v is None or isinstance(v, uuid.UUID):
            return v
        # Solo la forma canónica con guiones (sin llaves ni prefijo urn:uuid:)
        if not isinstance(v, str) or not UUID_RE.fullmatch(v):
            raise ValueError("Identificador de propietario inválido")
        return uuid.UUID(v)


# --- Conversión de errores ---
def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "body"
        if err["type"] == "value_error":
            message = str(err["ctx"]["error"])
        elif err["type"] == "missing":
            message = "Campo requerido"
        else:
            message = err["msg"]
        errors.append(FieldError(field, message))
    return errors


def _validar(schema: type[_Schema], data: Mapping | None) -> Any:
    try:
        return schema.model_validate({} if data is None else data)
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc)) from None


def _validar_rango(query: _RangoFechas) -> None:
    if query.start_date and query.end_date and query.start_date > query.end_date:
        raise ValidationError(
            [FieldError("endDate", "La fecha final debe ser posterior a la inicial")]
        )


# --- Puntos de entrada ---
def validate_pago_create(data: Mapping | None) -> PagoCreateIn:
    return _validar(PagoCreateIn, data)


def validate_pago_update(data: Mapping | None) -> PagoUpdateIn:
    return _validar(PagoUpdateIn, data)


def validate_pago_list_query(data: Mapping | None) -> PagoListQuery:
    query = _validar(PagoListQuery, data)
    _validar_rango(query)
    return query


def validate_pago_stats_query(data: Mapping | None) -> PagoStatsQuery:
    query = _validar(PagoStatsQuery, data)
    _validar_rango(query)
    return query
