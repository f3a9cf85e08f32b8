"""Pydantic schemas package"""
from .pago import (
    PagoCreateIn,
    PagoListQuery,
    PagoStatsQuery,
    PagoUpdateIn,
    validate_pago_create,
    validate_pago_list_query,
    validate_pago_stats_query,
    validate_pago_update,
)
from .usuario import UsuarioCreate, UsuarioRead, UsuarioUpdate

__all__ = [
    "PagoCreateIn",
    "PagoUpdateIn",
    "PagoListQuery",
    "PagoStatsQuery",
    "validate_pago_create",
    "validate_pago_update",
    "validate_pago_list_query",
    "validate_pago_stats_query",
    "UsuarioRead",
    "UsuarioCreate",
    "UsuarioUpdate",
]
