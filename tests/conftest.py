import os
import tempfile
from datetime import datetime

# Configuración de entorno ANTES de importar la app
_TMP_DIR = tempfile.mkdtemp(prefix="feelinpay-tests-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.sqlite')}"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import app.models  # noqa: F401
from app.core.rate_limit import limiter
from app.db.engine_sync import sync_engine
from app.main import app as fastapi_app
from app.models.pago import PagoCreate
from app.schemas.usuario import UsuarioAdminCreate
from app.seeders.roles import seed_roles
from app.services.user_service import UserService

PASSWORD = "clave-segura-123"


@pytest.fixture(autouse=True)
def setup_db():
    SQLModel.metadata.drop_all(sync_engine)
    SQLModel.metadata.create_all(sync_engine)
    limiter.reset()
    yield
    SQLModel.metadata.drop_all(sync_engine)


@pytest.fixture
def session():
    with Session(sync_engine) as s:
        yield s


@pytest.fixture
def client():
    with TestClient(fastapi_app) as c:
        yield c


@pytest.fixture
def roles(session):
    return seed_roles(session)


def crear_usuario(session, email, is_superuser=False, rol="propietario"):
    return UserService(session).create_user(
        UsuarioAdminCreate(
            email=email, password=PASSWORD, nombre="Usuario Prueba", rol=rol, is_superuser=is_superuser
        )
    )


@pytest.fixture
def propietario(session, roles):
    return crear_usuario(session, "owner@example.com")


@pytest.fixture
def otro_propietario(session, roles):
    return crear_usuario(session, "other@example.com")


@pytest.fixture
def admin(session, roles):
    return crear_usuario(session, "admin@example.com", is_superuser=True, rol="super_admin")


def login(client, email):
    response = client.post("/auth/login", data={"username": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def nuevo_pago(usuario_id, nombre="Juan Perez", monto=100.0, codigo=None, fecha=None):
    return PagoCreate(
        usuario_id=usuario_id,
        nombre_pagador=nombre,
        monto=monto,
        fecha=fecha or datetime(2024, 5, 1, 10, 0, 0),
        codigo_seguridad=codigo,
    )


def pago_payload(**overrides):
    payload = {
        "nombrePagador": "Juan Perez",
        "monto": 150.5,
        "fecha": "2024-05-01T10:00:00Z",
    }
    payload.update(overrides)
    return payload


