# app/core/rate_limit.py
"""
Control de admisión (SlowAPI).

Cuatro contadores de ventana fija por IP de origen, cada uno compartido por
todas las rutas de su ámbito:

| Ámbito   | Ventana | Máximo | Código                        | Rutas                         |
|----------|---------|--------|-------------------------------|-------------------------------|
| general  | 15 min  | 100    | RATE_LIMIT_EXCEEDED           | todas                         |
| auth     | 15 min  | 50     | AUTH_RATE_LIMIT_EXCEEDED      | /auth/*                       |
| registro | 60 min  | 3      | REGISTER_RATE_LIMIT_EXCEEDED  | /auth/register                |
| otp      | 5 min   | 3      | OTP_RATE_LIMIT_EXCEEDED       | /auth/forgot-password         |

Los límites se acumulan: toda petición pasa primero por el general
(dependencia global `admision_general`) y después por los de su ruta
(decorador `limitar(...)`). Los contadores viven en memoria del proceso salvo
que RATE_LIMIT_STORAGE_URI apunte a un almacén compartido (redis://...).
"""
import logging
from dataclasses import dataclass

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from slowapi.wrappers import Limit

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LimiteAcceso:
    ambito: str
    limite: str
    codigo: str
    mensaje: str


LIMITE_GENERAL = LimiteAcceso(
    "general",
    "100 per 15 minutes",
    "RATE_LIMIT_EXCEEDED",
    "Demasiadas solicitudes desde esta IP, intenta de nuevo en 15 minutos",
)
LIMITE_AUTH = LimiteAcceso(
    "auth",
    "50 per 15 minutes",
    "AUTH_RATE_LIMIT_EXCEEDED",
    "Demasiados intentos de login, intenta de nuevo en 15 minutos",
)
LIMITE_REGISTRO = LimiteAcceso(
    "registro",
    "3 per 60 minutes",
    "REGISTER_RATE_LIMIT_EXCEEDED",
    "Demasiados intentos de registro, intenta de nuevo en 1 hora",
)
LIMITE_OTP = LimiteAcceso(
    "otp",
    "3 per 5 minutes",
    "OTP_RATE_LIMIT_EXCEEDED",
    "Demasiadas solicitudes de código OTP, intenta de nuevo en 5 minutos",
)

LIMITES_POR_CODIGO = {
    lim.codigo: lim for lim in (LIMITE_GENERAL, LIMITE_AUTH, LIMITE_REGISTRO, LIMITE_OTP)
}


# --- Configuración de SlowAPI ---
limiter = Limiter(
    key_func=get_remote_address,
    headers_enabled=True,
    storage_uri=get_settings().rate_limit_storage_uri,
)

# Rutas con límites propios: las cabeceras X-RateLimit-* las pone su decorador
_RUTAS_CON_LIMITE_PROPIO: set[str] = set()

_GENERAL = Limit(
    parse(LIMITE_GENERAL.limite),
    get_remote_address,
    LIMITE_GENERAL.ambito,
    False,
    None,
    LIMITE_GENERAL.codigo,
    None,
    1,
    True,
)


def _nombre_ruta(func) -> str:
    return f"{func.__module__}.{func.__name__}"


def limitar(*limites: LimiteAcceso):
    """
    Decorador de ruta con límites propios, que se suman al general.
    Se evalúan en el orden indicado; el primero que se agota da el código.
    El endpoint debe recibir `request: Request` y `response: Response`.
    """

    def decorator(func):
        # Cada límite se registra bajo el nombre de func; la primera
        # evaluación los comprueba todos juntos.
        for limite in limites:
            func = limiter.shared_limit(
                limite.limite, scope=limite.ambito, error_message=limite.codigo
            )(func)
        _RUTAS_CON_LIMITE_PROPIO.add(_nombre_ruta(func))
        return func

    return decorator


def admision_general(request: Request, response: Response) -> None:
    """Contador general: uno por IP para toda la aplicación."""
    if not limiter.enabled:
        return
    args = [get_remote_address(request), LIMITE_GENERAL.ambito]
    request.state.view_rate_limit = (_GENERAL.limit, args)
    if not limiter.limiter.hit(_GENERAL.limit, *args):
        raise RateLimitExceeded(_GENERAL)

    endpoint = request.scope.get("endpoint")
    if endpoint is None or _nombre_ruta(endpoint) not in _RUTAS_CON_LIMITE_PROPIO:
        limiter._inject_headers(response, request.state.view_rate_limit)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    limite = LIMITES_POR_CODIGO.get(exc.detail, LIMITE_GENERAL)
    logger.warning(
        f"⚠️ [RateLimit] {limite.codigo} para {get_remote_address(request)} en {request.url.path}"
    )
    response = JSONResponse(
        status_code=429, content={"error": limite.mensaje, "code": limite.codigo}
    )
    # Mismas cabeceras X-RateLimit-* / Retry-After que las respuestas aceptadas
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)
