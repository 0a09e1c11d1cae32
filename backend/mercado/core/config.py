# backend/mercado/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/mercado/'
PACKAGE_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    PACKAGE_DIR: Path = PACKAGE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Mercado API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "postgres")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "mercado_db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # Permite apuntar a otro motor (por ejemplo SQLite en los tests)
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Clave para firmar la cookie de sesión - REQUERIDA del .env (sensible)
    SECRET_KEY: str

    # Sesión del administrador
    SESSION_COOKIE_NAME: str = "mercado_session"
    SESSION_MAX_AGE: int = 60 * 60 * 8
    SESSION_COOKIE_SECURE: bool = False

    # Contraseña de respaldo mientras no exista un hash guardado
    ADMIN_DEFAULT_PASSWORD: str = "admin123"
    ADMIN_PASSWORD_MIN_LENGTH: int = 6

    # Archivos públicos (UI estática e imágenes subidas)
    PUBLIC_DIR: Path = PACKAGE_DIR / "static"
    UPLOAD_MAX_BYTES: int = 2 * 1024 * 1024
    SEED_FILE_PATH: Path = PACKAGE_DIR.parent.parent / "data" / "categories.seed.json"

    # Apariencia
    DEFAULT_CORNER_IMAGE: str = "../images/cantoneira.png"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    # App Info - Del .env con defaults
    APP_ENVIRONMENT: str = "development"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def UPLOADS_DIR(self) -> Path:
        """Directorio físico donde se guardan las imágenes subidas."""
        return self.PUBLIC_DIR / "images" / "uploads"

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
