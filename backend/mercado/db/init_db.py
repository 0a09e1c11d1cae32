# backend/mercado/db/init_db.py
"""
Inicialización del almacén al arrancar la aplicación.

Crea las tablas que falten y garantiza las configuraciones por defecto. La
migración de datos antiguos NO se ejecuta aquí: es una herramienta aparte
(scripts/migrate_legacy_data.py).
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from mercado.db.database import Base
from mercado.db import models  # noqa: F401  registra los modelos en Base.metadata
from mercado.services.setting_service import setting_service

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(engine: AsyncEngine, session_factory: async_sessionmaker) -> None:
    await create_tables(engine)
    async with session_factory() as db:
        await setting_service.ensure_defaults(db)
    logger.info("🗄️ BASE DE DATOS: tablas y configuraciones por defecto listas")
