# app/core/errors.py
"""
Errores tipados de la capa de pagos.

- ValidationError: entrada inválida, con la lista de campos rechazados.
- NotFoundError: el identificador no existe.
- PersistenceError: fallo del backend (conexión, restricción, timeout).

El rechazo por exceso de solicitudes usa directamente
slowapi.errors.RateLimitExceeded (ver app/core/rate_limit.py).
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Base de todos los errores de la aplicación."""


class ValidationError(AppError):
    def __init__(self, errors: list[FieldError], message: str = "Datos de entrada inválidos"):
        super().__init__(message)
        self.message = message
        self.errors = list(errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def to_dict(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "errors": [e.to_dict() for e in self.errors],
        }


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id):
        super().__init__(f"{resource} {resource_id} no encontrado")
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenError(AppError):
    """El usuario autenticado no puede acceder al recurso pedido."""


class PersistenceError(AppError):
    def __init__(self, message: str, integrity: bool = False):
        super().__init__(message)
        self.message = message
        # True cuando el backend rechazó por una restricción (FK, unique)
        self.integrity = integrity
