# backend/mercado/core/logging_config.py
"""
Configuración del logging de la aplicación a partir de los settings.
"""

import logging
from pathlib import Path
from typing import Optional

from mercado.core.config import Settings, settings as default_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Aplica LOG_LEVEL y LOG_FORMAT al logger raíz.

    Si LOG_FILE_PATH está definido se añade además un handler de fichero,
    creando el directorio si no existe.
    """
    settings = settings or default_settings

    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
