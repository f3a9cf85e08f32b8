# app/services/pago_service.py
"""
Payment service layer.
Validates raw payloads and delegates persistence to a PagoRepositoryBase.
"""
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from app.core.errors import ForbiddenError, NotFoundError
from app.core.time import utc_now
from app.models.pago import Pago, PagoPage, PagoStats, PagoUpdate
from app.models.usuario import Usuario
from app.repositories.base import PagoRepositoryBase
from app.schemas.pago import (
    PagoListQuery,
    validate_pago_create,
    validate_pago_list_query,
    validate_pago_stats_query,
    validate_pago_update,
)

logger = logging.getLogger(__name__)


class PagoService:
    """
    Service layer for Pago operations.

    A pago is visible to its owner (usuario_id) and to superusers; for
    anyone else it does not exist.
    """

    def __init__(self, repository: PagoRepositoryBase):
        self.repository = repository

    def _get_visible(self, pago_id: uuid.UUID, usuario: Usuario) -> Pago:
        pago = self.repository.find_by_id(pago_id)
        if pago is None or not (usuario.is_superuser or pago.usuario_id == usuario.id):
            raise NotFoundError("Pago", pago_id)
        return pago

    def registrar_pago(self, usuario_id: uuid.UUID, data: Mapping[str, Any] | None) -> Pago:
        """
        Valida y registra un pago para el propietario indicado.

        Raises:
            ValidationError: si el payload no cumple las reglas.
            PersistenceError: propietario inexistente o código duplicado.
        """
        entrada = validate_pago_create(data)
        pago = self.repository.create(entrada.to_dto(usuario_id))
        logger.info(f"💰 Pago registrado: {pago.id} ({pago.monto:.2f}) para {usuario_id}")
        return pago

    def listar_pagos(
        self, usuario_id: uuid.UUID, query_data: Mapping[str, Any] | None
    ) -> tuple[PagoPage, PagoListQuery]:
        query = validate_pago_list_query(query_data)
        page = self.repository.find_by_propietario(
            usuario_id, page=query.page, limit=query.limit, filtros=query.filtros()
        )
        return page, query

    def obtener_pago(self, pago_id: uuid.UUID, usuario: Usuario) -> Pago:
        return self._get_visible(pago_id, usuario)

    def actualizar_pago(
        self, pago_id: uuid.UUID, data: Mapping[str, Any] | None, usuario: Usuario
    ) -> Pago:
        cambios = validate_pago_update(data)
        self._get_visible(pago_id, usuario)
        return self.repository.update(pago_id, cambios.to_dto())

    def eliminar_pago(self, pago_id: uuid.UUID, usuario: Usuario) -> None:
        self._get_visible(pago_id, usuario)
        self.repository.delete(pago_id)
        logger.info(f"🗑️ Pago eliminado: {pago_id}")

    def estadisticas(self, query_data: Mapping[str, Any] | None, usuario: Usuario) -> PagoStats:
        """
        Estadísticas de pagos. Un propietario solo ve las suyas; un superusuario
        puede pedir las de cualquier propietario o las globales.
        """
        query = validate_pago_stats_query(query_data)
        propietario_id = query.propietario_id
        if not usuario.is_superuser:
            if propietario_id is not None and propietario_id != usuario.id:
                raise ForbiddenError("No puedes consultar pagos de otro propietario")
            propietario_id = usuario.id
        return self.repository.get_stats(
            propietario_id, desde=query.start_date, hasta=query.end_date
        )

    # --- Procesamiento posterior (notificación / hoja de cálculo) ---
    def marcar_notificado(self, pago_id: uuid.UUID) -> Pago:
        return self.repository.update(
            pago_id, PagoUpdate(notificado_empleados=True, procesado_at=utc_now())
        )

    def marcar_registrado_en_sheets(self, pago_id: uuid.UUID) -> Pago:
        return self.repository.update(pago_id, PagoUpdate(registrado_en_sheets=True))
