"""
Capa de repositorio: acceso a datos de pagos.
Los repositorios no contienen lógica de negocio.
"""
from .base import PagoRepositoryBase
from .memory import InMemoryPagoRepository
from .pago_repository import PagoRepository

__all__ = ["PagoRepositoryBase", "PagoRepository", "InMemoryPagoRepository"]
