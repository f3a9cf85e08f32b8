# app/repositories/base.py
"""
Contrato del repositorio de pagos.

Cualquier backend (SQLModel, memoria, otro motor) debe implementar estas
operaciones con la misma semántica:

- create: flags en False, created_at == updated_at.
- find_by_id: None si no existe (nunca lanza por ausencia).
- find_by_propietario: más recientes primero (created_at DESC, id DESC),
  offset (page - 1) * limit. El conteo y la página son lecturas
  independientes; con escrituras concurrentes pueden no coincidir.
- update / delete: NotFoundError si el id no existe.
- get_stats: total, monto_total y promedio; siempre numéricos (0 si vacío).
- filtros.search: subcadena literal (% y _ no son comodines) en nombre o
  código; solo las letras ASCII se comparan sin distinguir mayúsculas.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime

from app.models.pago import Pago, PagoCreate, PagoFiltros, PagoPage, PagoStats, PagoUpdate


class PagoRepositoryBase(ABC):
    @abstractmethod
    def create(self, data: PagoCreate) -> Pago: ...

    @abstractmethod
    def find_by_id(self, pago_id: uuid.UUID) -> Pago | None: ...

    @abstractmethod
    def find_by_propietario(
        self,
        propietario_id: uuid.UUID,
        page: int = 1,
        limit: int = 20,
        filtros: PagoFiltros | None = None,
    ) -> PagoPage: ...

    @abstractmethod
    def update(self, pago_id: uuid.UUID, data: PagoUpdate) -> Pago: ...

    @abstractmethod
    def delete(self, pago_id: uuid.UUID) -> None: ...

    @abstractmethod
    def get_stats(
        self,
        propietario_id: uuid.UUID | None = None,
        desde: datetime | None = None,
        hasta: datetime | None = None,
    ) -> PagoStats: ...
