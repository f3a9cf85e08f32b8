# app/api/auth/main.py
"""
Rutas de autenticación con límites de acceso propios:
todas pasan por el límite auth (además del general); register suma el de
registro y forgot-password el de otp.
Delegan en el UserManager de FastAPI Users.
"""
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users import exceptions
from fastapi_users.authentication import Strategy
from fastapi_users.router.common import ErrorCode
from pydantic import EmailStr

from ...core.rate_limit import LIMITE_AUTH, LIMITE_OTP, LIMITE_REGISTRO, limitar
from ...core.users import UserManager, auth_backend_jwt, get_user_manager
from ...schemas.usuario import UsuarioCreate, UsuarioRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
@limitar(LIMITE_AUTH)
async def login(
    request: Request,
    response: Response,
    credentials: OAuth2PasswordRequestForm = Depends(),
    user_manager: UserManager = Depends(get_user_manager),
    strategy: Strategy = Depends(auth_backend_jwt.get_strategy),
):
    user = await user_manager.authenticate(credentials)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorCode.LOGIN_BAD_CREDENTIALS,
        )
    login_response = await auth_backend_jwt.login(strategy, user)
    await user_manager.on_after_login(user, request, login_response)
    return login_response


@router.post("/register", response_model=UsuarioRead, status_code=status.HTTP_201_CREATED)
@limitar(LIMITE_AUTH, LIMITE_REGISTRO)
async def register(
    request: Request,
    response: Response,
    usuario_create: UsuarioCreate,
    user_manager: UserManager = Depends(get_user_manager),
):
    try:
        usuario = await user_manager.create(usuario_create, safe=True, request=request)
    except exceptions.UserAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorCode.REGISTER_USER_ALREADY_EXISTS,
        )
    except exceptions.InvalidPasswordException as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": ErrorCode.REGISTER_INVALID_PASSWORD, "reason": e.reason},
        )
    return UsuarioRead.model_validate(usuario)


@router.post("/forgot-password", status_code=status.HTTP_202_ACCEPTED)
@limitar(LIMITE_AUTH, LIMITE_OTP)
async def forgot_password(
    request: Request,
    response: Response,
    email: EmailStr = Body(..., embed=True),
    user_manager: UserManager = Depends(get_user_manager),
):
    """
    Genera un código de un solo uso para restablecer la contraseña.
    Responde igual exista o no el email.
    """
    try:
        user = await user_manager.get_by_email(email)
        await user_manager.forgot_password(user, request)
    except exceptions.UserNotExists:
        logger.info(f"Solicitud de código para email no registrado: {email}")
    except exceptions.UserInactive:
        logger.info(f"Solicitud de código para usuario inactivo: {email}")
    return None


@router.post("/reset-password")
@limitar(LIMITE_AUTH)
async def reset_password(
    request: Request,
    response: Response,
    token: str = Body(...),
    password: str = Body(...),
    user_manager: UserManager = Depends(get_user_manager),
):
    try:
        await user_manager.reset_password(token, password, request)
    except (exceptions.InvalidResetPasswordToken, exceptions.UserNotExists, exceptions.UserInactive):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorCode.RESET_PASSWORD_BAD_TOKEN,
        )
    except exceptions.InvalidPasswordException as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": ErrorCode.RESET_PASSWORD_INVALID_PASSWORD, "reason": e.reason},
        )
    return None
