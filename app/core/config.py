# app/core/config.py
"""
Configuración central de la aplicación.
Lee variables de entorno (y el archivo .env) con pydantic-settings.
"""
import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Cargar .env ANTES de construir Settings
load_dotenv()

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "data")
DEFAULT_DATABASE_FILE = os.path.join(DATA_DIR, "db", "pagos.sqlite")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    secret_key: str
    database_url: str = f"sqlite:///{DEFAULT_DATABASE_FILE}"
    app_env: str = "development"
    log_level: str = "INFO"
    log_dir: str = "logs"
    allowed_origins: str = "http://localhost:8000"
    access_token_lifetime_seconds: int = 28800  # 8 horas
    rate_limit_storage_uri: str = "memory://"

    super_admin_email: str = "admin@feelinpay.com"
    super_admin_nombre: str = "Super Administrador"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """URL equivalente para el motor asíncrono (fastapi-users)."""
        if self.database_url.startswith("sqlite:"):
            return self.database_url.replace("sqlite:", "sqlite+aiosqlite:", 1)
        if self.database_url.startswith("postgresql:"):
            return self.database_url.replace("postgresql:", "postgresql+asyncpg:", 1)
        return self.database_url

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Instancia única de Settings."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
