# app/repositories/memory.py
"""
InMemoryPagoRepository: doble de pruebas que cumple el mismo contrato que
PagoRepository, guardando los pagos en un dict.
"""
import string
import uuid
from datetime import datetime

from app.core.errors import FieldError, NotFoundError, PersistenceError, ValidationError
from app.core.time import utc_now
from app.models.pago import Pago, PagoCreate, PagoFiltros, PagoPage, PagoStats, PagoUpdate

from .base import PagoRepositoryBase
from .pago_repository import CAMPOS_NO_NULOS

# Igual que LIKE en SQLite: solo las letras ASCII se comparan sin mayúsculas
_ASCII_MINUSCULAS = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _plegar(texto: str) -> str:
    return texto.translate(_ASCII_MINUSCULAS)


class InMemoryPagoRepository(PagoRepositoryBase):
    def __init__(self, propietarios: set[uuid.UUID] | None = None):
        """
        Args:
            propietarios: ids de usuario válidos. Si se indica, crear un pago
                para un propietario desconocido falla como una FK rota.
        """
        self.propietarios = propietarios
        self._pagos: dict[uuid.UUID, Pago] = {}

    def _copia(self, pago: Pago) -> Pago:
        return Pago(**pago.model_dump())

    def _coincide(self, pago: Pago, propietario_id, filtros: PagoFiltros | None) -> bool:
        if propietario_id is not None and pago.usuario_id != propietario_id:
            return False
        if filtros is None:
            return True
        if filtros.search:
            texto = _plegar(filtros.search)
            en_nombre = texto in _plegar(pago.nombre_pagador)
            en_codigo = pago.codigo_seguridad is not None and texto in _plegar(pago.codigo_seguridad)
            if not (en_nombre or en_codigo):
                return False
        if filtros.desde is not None and pago.fecha < filtros.desde:
            return False
        if filtros.hasta is not None and pago.fecha > filtros.hasta:
            return False
        return True

    def create(self, data: PagoCreate) -> Pago:
        if self.propietarios is not None and data.usuario_id not in self.propietarios:
            raise PersistenceError("Propietario inexistente", integrity=True)
        if data.codigo_seguridad is not None and any(
            p.codigo_seguridad == data.codigo_seguridad for p in self._pagos.values()
        ):
            raise PersistenceError("Código de seguridad duplicado", integrity=True)

        ahora = utc_now()
        pago = Pago(
            id=uuid.uuid4(),
            **data.model_dump(),
            registrado_en_sheets=False,
            notificado_empleados=False,
            created_at=ahora,
            updated_at=ahora,
        )
        self._pagos[pago.id] = pago
        return self._copia(pago)

    def find_by_id(self, pago_id: uuid.UUID) -> Pago | None:
        pago = self._pagos.get(pago_id)
        return self._copia(pago) if pago else None

    def find_by_propietario(
        self,
        propietario_id: uuid.UUID,
        page: int = 1,
        limit: int = 20,
        filtros: PagoFiltros | None = None,
    ) -> PagoPage:
        coincidencias = [
            p for p in self._pagos.values() if self._coincide(p, propietario_id, filtros)
        ]
        coincidencias.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        skip = (page - 1) * limit
        return PagoPage(
            pagos=[self._copia(p) for p in coincidencias[skip : skip + limit]],
            total=len(coincidencias),
        )

    def update(self, pago_id: uuid.UUID, data: PagoUpdate) -> Pago:
        pago = self._pagos.get(pago_id)
        if pago is None:
            raise NotFoundError("Pago", pago_id)

        cambios = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if not (v is None and k in CAMPOS_NO_NULOS)
        }
        procesado_at = cambios.get("procesado_at")
        if procesado_at is not None and procesado_at < pago.created_at:
            raise ValidationError(
                [FieldError("procesadoAt", "La fecha de procesamiento no puede ser anterior a la creación")]
            )
        codigo = cambios.get("codigo_seguridad")
        if codigo is not None and any(
            p.codigo_seguridad == codigo and p.id != pago_id for p in self._pagos.values()
        ):
            raise PersistenceError("Código de seguridad duplicado", integrity=True)

        for key, value in cambios.items():
            setattr(pago, key, value)
        pago.updated_at = max(utc_now(), pago.updated_at)
        return self._copia(pago)

    def delete(self, pago_id: uuid.UUID) -> None:
        if self._pagos.pop(pago_id, None) is None:
            raise NotFoundError("Pago", pago_id)

    def get_stats(
        self,
        propietario_id: uuid.UUID | None = None,
        desde: datetime | None = None,
        hasta: datetime | None = None,
    ) -> PagoStats:
        filtros = PagoFiltros(desde=desde, hasta=hasta)
        montos = [
            p.monto for p in self._pagos.values() if self._coincide(p, propietario_id, filtros)
        ]
        if not montos:
            return PagoStats()
        suma = sum(montos)
        return PagoStats(total=len(montos), monto_total=suma, promedio=suma / len(montos))
