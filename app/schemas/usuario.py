# app/schemas/usuario.py
"""
Pydantic schemas for Usuario.
These schemas control what data is sent/received via the API.
"""
import uuid
from typing import Optional

from fastapi_users import schemas
from pydantic import BaseModel, EmailStr


class UsuarioRead(schemas.BaseUser[uuid.UUID]):
    """Safe-to-expose usuario fields."""

    nombre: str
    telefono: Optional[str] = None
    rol_id: Optional[uuid.UUID] = None


class UsuarioCreate(schemas.BaseUserCreate):
    """Self-registration payload (email + password + profile)."""

    nombre: str = ""
    telefono: Optional[str] = None


class UsuarioUpdate(schemas.BaseUserUpdate):
    """
    Self-service update (/users/me).
    The role is not editable here; see UsuarioAdminUpdate.
    """

    nombre: Optional[str] = None
    telefono: Optional[str] = None


class UsuarioAdminCreate(BaseModel):
    email: EmailStr
    password: str
    nombre: str = ""
    telefono: Optional[str] = None
    rol: str = "propietario"
    is_superuser: bool = False


class UsuarioAdminUpdate(BaseModel):
    """Admin update. All fields are optional."""

    email: Optional[EmailStr] = None
    password: Optional[str] = None
    nombre: Optional[str] = None
    telefono: Optional[str] = None
    rol: Optional[str] = None
    is_superuser: Optional[bool] = None
    disabled: Optional[bool] = None
