# mercado_project/scripts/migrate_legacy_data.py

"""
Script de migración única desde el esquema antiguo de dos niveles.

Propósito:
Copia las categorías, subcategorías e ítems de la base de datos antigua al
árbol de tres niveles actual. Cada categoría antigua se convierte en una
general con una categoría puente, y sus subcategorías cuelgan del puente.

Solo actúa si las tablas de destino están vacías; si no, termina sin tocar
nada. Cualquier fallo deshace toda la migración.

Uso:
    python scripts/migrate_legacy_data.py --legacy-url sqlite+aiosqlite:///./legacy.db
    python scripts/migrate_legacy_data.py --legacy-url ... --target-url postgresql+asyncpg://...

Requisitos Previos:
-   Un archivo `.env` configurado (SECRET_KEY y la conexión de destino).
"""
import argparse
import asyncio
import logging
import os
import sys
from dataclasses import asdict

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

# Añadir el directorio backend al PYTHONPATH
backend_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend"))
sys.path.insert(0, backend_root)

from mercado.core.config import settings
from mercado.core.logging_config import configure_logging
from mercado.db.init_db import init_db
from mercado.services.legacy_migration import migrate_legacy_data

logger = logging.getLogger("migrate_legacy_data")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Migra los datos del esquema antiguo al árbol de tres niveles.")
    parser.add_argument("--legacy-url", required=True, help="URL asíncrona de la base de datos antigua")
    parser.add_argument(
        "--target-url",
        default=settings.DATABASE_URL,
        help="URL asíncrona de la base de datos de destino (por defecto la de la aplicación)",
    )
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(settings)
    logger.info("--- Iniciando migración de datos antiguos ---")

    legacy_engine = create_async_engine(args.legacy_url)
    target_engine = create_async_engine(args.target_url)
    try:
        session_factory = async_sessionmaker(bind=target_engine, expire_on_commit=False, autoflush=False)
        await init_db(target_engine, session_factory)
        async with session_factory() as db:
            report = await migrate_legacy_data(db, legacy_engine)
    finally:
        await legacy_engine.dispose()
        await target_engine.dispose()

    if report.migrated:
        logger.info(f"✅ Migración completada: {asdict(report)}")
    else:
        logger.warning(f"⚠️ Migración no aplicada: {report.reason}")
    logger.info("--- Migración finalizada ---")
    return 0 if report.migrated else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
