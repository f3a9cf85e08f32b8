# app/services/user_service.py
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.errors import NotFoundError, PersistenceError
from ..core.time import utc_now
from ..core.users import password_helper
from ..models.usuario import Rol, Usuario
from ..schemas.usuario import UsuarioAdminCreate, UsuarioAdminUpdate


class UserService:
    def __init__(self, session: Session):
        self.session = session

    def _get_rol(self, nombre: str) -> Rol:
        rol = self.session.exec(select(Rol).where(Rol.nombre == nombre)).first()
        if not rol:
            raise ValueError(f"El rol '{nombre}' no existe.")
        return rol

    def get_all_users(self) -> List[Usuario]:
        statement = select(Usuario).order_by(Usuario.email)
        return self.session.exec(statement).all()

    def get_user(self, usuario_id: uuid.UUID) -> Usuario:
        db_user = self.session.get(Usuario, usuario_id)
        if not db_user:
            raise NotFoundError("Usuario", usuario_id)
        return db_user

    def get_user_by_email(self, email: str) -> Optional[Usuario]:
        return self.session.exec(select(Usuario).where(Usuario.email == email)).first()

    def create_user(self, user_create: UsuarioAdminCreate) -> Usuario:
        # Validar si ya existe
        if self.get_user_by_email(user_create.email):
            raise ValueError("El email ya está registrado.")

        rol = self._get_rol(user_create.rol)
        db_user = Usuario(
            email=user_create.email,
            hashed_password=password_helper.hash(user_create.password),
            nombre=user_create.nombre,
            telefono=user_create.telefono,
            rol_id=rol.id,
            is_superuser=user_create.is_superuser,
            is_verified=True,
        )

        self.session.add(db_user)
        self.session.commit()
        self.session.refresh(db_user)
        return db_user

    def update_user(self, usuario_id: uuid.UUID, user_update: UsuarioAdminUpdate) -> Usuario:
        db_user = self.get_user(usuario_id)

        # Aplicar cambios solo si se enviaron
        update_data = user_update.model_dump(exclude_unset=True)

        if "disabled" in update_data:
            is_disabled = update_data.pop("disabled")
            if is_disabled is not None:
                db_user.is_active = not is_disabled

        password = update_data.pop("password", None)
        if password:
            db_user.hashed_password = password_helper.hash(password)

        rol_nombre = update_data.pop("rol", None)
        if rol_nombre:
            db_user.rol_id = self._get_rol(rol_nombre).id

        for key, value in update_data.items():
            if value is not None:
                setattr(db_user, key, value)
        db_user.updated_at = utc_now()

        self.session.add(db_user)
        self.session.commit()
        self.session.refresh(db_user)
        return db_user

    def update_password(self, email: str, password: str) -> Usuario:
        db_user = self.get_user_by_email(email)
        if not db_user:
            raise NotFoundError("Usuario", email)

        db_user.hashed_password = password_helper.hash(password)
        db_user.updated_at = utc_now()
        self.session.add(db_user)
        self.session.commit()
        self.session.refresh(db_user)
        return db_user

    def delete_user(self, usuario_id: uuid.UUID):
        db_user = self.get_user(usuario_id)
        self.session.delete(db_user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise PersistenceError(
                "El usuario tiene registros asociados (pagos, membresías)", integrity=True
            ) from e
