# app/repositories/pago_repository.py
"""
PagoRepository: implementación SQLModel del contrato PagoRepositoryBase.
Todo fallo de SQLAlchemy se revierte y se propaga como PersistenceError,
sin reintentos.
"""
import logging
import uuid
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from app.core.errors import FieldError, NotFoundError, PersistenceError, ValidationError
from app.core.time import utc_now
from app.models.pago import Pago, PagoCreate, PagoFiltros, PagoPage, PagoStats, PagoUpdate

from .base import PagoRepositoryBase

logger = logging.getLogger(__name__)

# Columnas NOT NULL: un None en el DTO se interpreta como "sin cambios"
CAMPOS_NO_NULOS = {
    "nombre_pagador",
    "monto",
    "fecha",
    "registrado_en_sheets",
    "notificado_empleados",
}


def escapar_like(texto: str) -> str:
    """Escapa los comodines de LIKE para buscar el texto literal."""
    return texto.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def condiciones_pago(
    propietario_id: uuid.UUID | None = None,
    filtros: PagoFiltros | None = None,
) -> list:
    """Condiciones WHERE compartidas por el listado, el conteo y las estadísticas."""
    condiciones = []
    if propietario_id is not None:
        condiciones.append(Pago.usuario_id == propietario_id)
    if filtros is None:
        return condiciones
    if filtros.search:
        patron = f"%{escapar_like(filtros.search)}%"
        condiciones.append(
            or_(
                col(Pago.nombre_pagador).ilike(patron, escape="\\"),
                col(Pago.codigo_seguridad).ilike(patron, escape="\\"),
            )
        )
    if filtros.desde is not None:
        condiciones.append(Pago.fecha >= filtros.desde)
    if filtros.hasta is not None:
        condiciones.append(Pago.fecha <= filtros.hasta)
    return condiciones


class PagoRepository(PagoRepositoryBase):
    """
    Repositorio de pagos sobre una Session de SQLModel.

    Usage:
        with Session(sync_engine) as session:
            repo = PagoRepository(session)
            pago = repo.create(dto)
    """

    def __init__(self, session: Session):
        self.session = session

    # --- helpers ---
    def _commit(self, pago: Pago | None, accion: str) -> None:
        try:
            self.session.commit()
            if pago is not None:
                self.session.refresh(pago)
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"❌ [Pagos] Restricción violada al {accion} pago: {e.orig}")
            raise PersistenceError(f"Error de integridad al {accion} pago", integrity=True) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"❌ [Pagos] Error de base de datos al {accion} pago: {e}")
            raise PersistenceError(f"Error de base de datos al {accion} pago") from e

    def _get_or_raise(self, pago_id: uuid.UUID) -> Pago:
        pago = self.find_by_id(pago_id)
        if pago is None:
            raise NotFoundError("Pago", pago_id)
        return pago

    # --- operaciones ---
    def create(self, data: PagoCreate) -> Pago:
        ahora = utc_now()
        pago = Pago(
            **data.model_dump(),
            registrado_en_sheets=False,
            notificado_empleados=False,
            created_at=ahora,
            updated_at=ahora,
        )
        self.session.add(pago)
        self._commit(pago, "crear")
        logger.debug(f"Pago {pago.id} creado para propietario {pago.usuario_id}")
        return pago

    def find_by_id(self, pago_id: uuid.UUID) -> Pago | None:
        try:
            return self.session.get(Pago, pago_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ [Pagos] Error leyendo pago {pago_id}: {e}")
            raise PersistenceError("Error de base de datos al leer pago") from e

    def find_by_propietario(
        self,
        propietario_id: uuid.UUID,
        page: int = 1,
        limit: int = 20,
        filtros: PagoFiltros | None = None,
    ) -> PagoPage:
        condiciones = condiciones_pago(propietario_id, filtros)
        skip = (page - 1) * limit

        # Dos lecturas independientes, sin transacción que las agrupe.
        count_stmt = select(func.count()).select_from(Pago).where(*condiciones)
        page_stmt = (
            select(Pago)
            .where(*condiciones)
            .order_by(col(Pago.created_at).desc(), col(Pago.id).desc())
            .offset(skip)
            .limit(limit)
        )
        try:
            total = self.session.exec(count_stmt).one()
            pagos = list(self.session.exec(page_stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"❌ [Pagos] Error listando pagos de {propietario_id}: {e}")
            raise PersistenceError("Error de base de datos al listar pagos") from e

        return PagoPage(pagos=pagos, total=total)

    def update(self, pago_id: uuid.UUID, data: PagoUpdate) -> Pago:
        pago = self._get_or_raise(pago_id)

        cambios = data.model_dump(exclude_unset=True)
        cambios = {
            k: v for k, v in cambios.items() if not (v is None and k in CAMPOS_NO_NULOS)
        }

        procesado_at = cambios.get("procesado_at")
        if procesado_at is not None and procesado_at < pago.created_at:
            raise ValidationError(
                [FieldError("procesadoAt", "La fecha de procesamiento no puede ser anterior a la creación")]
            )

        for key, value in cambios.items():
            setattr(pago, key, value)
        pago.updated_at = max(utc_now(), pago.updated_at)

        self.session.add(pago)
        self._commit(pago, "actualizar")
        return pago

    def delete(self, pago_id: uuid.UUID) -> None:
        pago = self._get_or_raise(pago_id)
        self.session.delete(pago)
        self._commit(None, "eliminar")

    def get_stats(
        self,
        propietario_id: uuid.UUID | None = None,
        desde: datetime | None = None,
        hasta: datetime | None = None,
    ) -> PagoStats:
        condiciones = condiciones_pago(propietario_id, PagoFiltros(desde=desde, hasta=hasta))
        statement = select(
            func.count(col(Pago.id)),
            func.coalesce(func.sum(Pago.monto), 0),
            func.coalesce(func.avg(Pago.monto), 0),
        ).where(*condiciones)
        try:
            total, suma, promedio = self.session.exec(statement).one()
        except SQLAlchemyError as e:
            logger.error(f"❌ [Pagos] Error calculando estadísticas: {e}")
            raise PersistenceError("Error de base de datos al calcular estadísticas") from e

        return PagoStats(total=total, monto_total=float(suma), promedio=float(promedio))
