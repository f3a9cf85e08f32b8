# app/api/pagos/main.py
import math
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import current_active_user
from ...db.engine_sync import get_sync_session
from ...models.pago import PagoRead, PagoStats
from ...models.usuario import Usuario
from ...repositories.pago_repository import PagoRepository
from ...services.pago_service import PagoService
from .models import PagoListResponse, Pagination

router = APIRouter()


# --- Inyección de Dependencia ---
def get_pago_service(session: Session = Depends(get_sync_session)) -> PagoService:
    return PagoService(PagoRepository(session))


# --- Endpoints ---
@router.post("/pagos", response_model=PagoRead, status_code=status.HTTP_201_CREATED)
def create_pago(
    payload: dict[str, Any] = Body(...),
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    """Registra un pago a nombre del usuario autenticado."""
    return service.registrar_pago(current_user.id, payload)


@router.get("/pagos", response_model=PagoListResponse)
def list_pagos(
    request: Request,
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    """Pagos del usuario autenticado, más recientes primero."""
    page, query = service.listar_pagos(current_user.id, dict(request.query_params))
    return PagoListResponse(
        pagos=[PagoRead.model_validate(p) for p in page.pagos],
        pagination=Pagination(
            page=query.page,
            limit=query.limit,
            total=page.total,
            total_pages=math.ceil(page.total / query.limit),
        ),
    )


@router.get("/pagos/stats", response_model=PagoStats)
def get_pagos_stats(
    request: Request,
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    return service.estadisticas(dict(request.query_params), current_user)


@router.get("/pagos/{pago_id}", response_model=PagoRead)
def get_pago(
    pago_id: uuid.UUID,
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    return service.obtener_pago(pago_id, current_user)


@router.put("/pagos/{pago_id}", response_model=PagoRead)
def update_pago(
    pago_id: uuid.UUID,
    payload: dict[str, Any] = Body(...),
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    return service.actualizar_pago(pago_id, payload, current_user)


@router.post("/pagos/{pago_id}/notificado", response_model=PagoRead)
def mark_pago_notificado(
    pago_id: uuid.UUID,
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    """Marca el pago como notificado a los empleados (fija procesadoAt)."""
    service.obtener_pago(pago_id, current_user)
    return service.marcar_notificado(pago_id)


@router.delete("/pagos/{pago_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pago(
    pago_id: uuid.UUID,
    request: Request,
    service: PagoService = Depends(get_pago_service),
    current_user: Usuario = Depends(current_active_user),
):
    service.eliminar_pago(pago_id, current_user)
    log_action("DELETE", "pago", str(pago_id), user=current_user, request=request)
