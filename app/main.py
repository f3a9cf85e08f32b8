# app/main.py
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# SlowAPI (Rate Limiting)
from slowapi.errors import RateLimitExceeded

from .core.config import configure_logging, get_settings
from .core.errors import (
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .core.rate_limit import admision_general, limiter, rate_limit_exceeded_handler
from .core.users import fastapi_users
from .db.engine_sync import create_sync_db_and_tables
from .schemas.usuario import UsuarioRead, UsuarioUpdate

# Importaciones de API Routers
from .api import health
from .api.auth import main as auth_main_api
from .api.pagos import main as pagos_main_api
from .api.users import main as users_main_api

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

# El límite general se aplica a todas las rutas como dependencia global
app = FastAPI(
    title="Feelin Pay - Back Office",
    version="1.0.0",
    dependencies=[Depends(admision_general)],
)


# --- Database Initialization ---
@app.on_event("startup")
def on_startup():
    """Initialize database tables on application startup"""
    create_sync_db_and_tables()
    logger.info("✅ Database tables initialized")


# --- Configuración de SlowAPI ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# ============================================================================
# --- MANEJO DE ERRORES DE DOMINIO ---
# ============================================================================
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"success": False, "message": str(exc)})


@app.exception_handler(ForbiddenError)
async def forbidden_error_handler(request: Request, exc: ForbiddenError):
    return JSONResponse(status_code=403, content={"success": False, "message": str(exc)})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    if exc.integrity:
        return JSONResponse(status_code=409, content={"success": False, "message": exc.message})
    logger.error(f"❌ Error de persistencia en {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=500, content={"success": False, "message": "Error interno del servidor"}
    )


# ============================================================================
# --- SEGURIDAD: CONFIGURACIÓN CORS ESTRICTA ---
# ============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# --- SEGURIDAD: CABECERAS DE SEGURIDAD HTTP ---
# ============================================================================
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# ============================================================================
# --- ROUTERS INCLUSION ---
# ============================================================================

# 1. Auth (login / register / códigos de un solo uso)
app.include_router(auth_main_api.router, prefix="/auth", tags=["Auth"])
app.include_router(
    fastapi_users.get_users_router(UsuarioRead, UsuarioUpdate),
    prefix="/users",
    tags=["FastAPI Users - Users"],
)

# 2. Domain API Routers
app.include_router(health.router, prefix="/api")
app.include_router(pagos_main_api.router, prefix="/api", tags=["Pagos"])
app.include_router(users_main_api.router, prefix="/api", tags=["Usuarios"])
