import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import current_superuser
from ...db.engine_sync import get_sync_session
from ...models.usuario import Usuario
from ...schemas.usuario import UsuarioAdminCreate, UsuarioAdminUpdate, UsuarioRead
from ...services.user_service import UserService

router = APIRouter()


# --- Inyección de Dependencias ---
def get_user_service(session: Session = Depends(get_sync_session)) -> UserService:
    return UserService(session)


@router.get("/usuarios", response_model=List[UsuarioRead])
def api_get_all_users(
    service: UserService = Depends(get_user_service),
    current_user: Usuario = Depends(current_superuser),
):
    return service.get_all_users()


@router.post("/usuarios", response_model=UsuarioRead, status_code=status.HTTP_201_CREATED)
def api_create_user(
    user_data: UsuarioAdminCreate,
    service: UserService = Depends(get_user_service),
    current_user: Usuario = Depends(current_superuser),
):
    try:
        return service.create_user(user_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/usuarios/{usuario_id}", response_model=UsuarioRead)
def api_update_user(
    usuario_id: uuid.UUID,
    user_data: UsuarioAdminUpdate,
    service: UserService = Depends(get_user_service),
    current_user: Usuario = Depends(current_superuser),
):
    try:
        return service.update_user(usuario_id, user_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/usuarios/{usuario_id}", status_code=status.HTTP_204_NO_CONTENT)
def api_delete_user(
    usuario_id: uuid.UUID,
    request: Request,
    service: UserService = Depends(get_user_service),
    current_user: Usuario = Depends(current_superuser),
):
    if usuario_id == current_user.id:
        raise HTTPException(status_code=403, detail="No puedes eliminar tu propia cuenta.")
    service.delete_user(usuario_id)
    log_action("DELETE", "usuario", str(usuario_id), user=current_user, request=request)
