# backend/mercado/services/legacy_migration.py
"""
Migración única desde el esquema antiguo de dos niveles.

El esquema antiguo tenía tres tablas: categories(id, name, image),
subcategories(id, category_id, name, image) e items(id, subcategory_id,
name, description, price, quantity, image). La migración lo transforma en
el árbol de tres niveles actual:

- cada categoría antigua pasa a ser una general (nivel 1) con una
  categoría puente (nivel 2) llamada "<nombre> • Coleções";
- cada subcategoría antigua cuelga (nivel 3) de la categoría puente;
- cada ítem antiguo se reasigna al nuevo ID de su subcategoría, con el
  precio antiguo como precio en moedas y 0 en reales. Los precios y
  cantidades negativos se guardan como 0.

Solo se ejecuta si las tablas de destino están vacías. Es de mejor
esfuerzo: cualquier fallo deshace toda la migración, se registra y se
informa en el MigrationReport, sin lanzar excepciones al llamador.

Se invoca explícitamente desde scripts/migrate_legacy_data.py.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from mercado.crud import category_crud, item_crud
from mercado.db.models.category_model import CATEGORY_LEVEL, GENERAL_LEVEL, SUBCATEGORY_LEVEL, Category
from mercado.db.models.item_model import Item

logger = logging.getLogger(__name__)

BRIDGE_SUFFIX = "Coleções"


@dataclass
class MigrationReport:
    migrated: bool = False
    reason: str = ""
    generals: int = 0
    bridges: int = 0
    subcategories: int = 0
    items: int = 0
    skipped_items: int = 0


def bridge_name(legacy_name: str) -> str:
    """Nombre de la categoría puente creada bajo cada categoría antigua."""
    return f"{legacy_name} • {BRIDGE_SUFFIX}" if legacy_name else BRIDGE_SUFFIX


async def _legacy_tables(legacy_engine: AsyncEngine) -> set:
    async with legacy_engine.connect() as conn:
        names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    return set(names)


async def migrate_legacy_data(db: AsyncSession, legacy_engine: AsyncEngine) -> MigrationReport:
    """
    Migra los datos antiguos a las tablas actuales si procede.

    Args:
        db: Sesión sobre la base de datos de destino
        legacy_engine: Motor conectado a la base de datos antigua

    Returns:
        MigrationReport con migrated=True y los contadores si se aplicó,
        o migrated=False y el motivo en caso contrario.
    """
    report = MigrationReport()

    try:
        if await category_crud.count_categories(db) > 0 or await item_crud.count_items(db) > 0:
            report.reason = "target tables are not empty"
            return report

        tables = await _legacy_tables(legacy_engine)
        if "categories" not in tables or "subcategories" not in tables:
            report.reason = "legacy tables not found"
            return report

        async with legacy_engine.connect() as conn:
            legacy_categories = (await conn.execute(
                text("SELECT id, name, image FROM categories ORDER BY id")
            )).mappings().all()
            if not legacy_categories:
                report.reason = "legacy tables are empty"
                return report

            legacy_subcategories = (await conn.execute(
                text("SELECT id, category_id, name, image FROM subcategories ORDER BY id")
            )).mappings().all()

            legacy_items = []
            if "items" in tables:
                legacy_items = (await conn.execute(
                    text("SELECT id, subcategory_id, name, description, price, quantity, image FROM items ORDER BY id")
                )).mappings().all()

        bridge_by_legacy_category: Dict[int, int] = {}
        for legacy in legacy_categories:
            name = legacy["name"] or ""
            image = legacy["image"] or ""
            general = Category(parent_id=None, name=name, level=GENERAL_LEVEL, image_url=image)
            db.add(general)
            await db.flush()
            bridge = Category(parent_id=general.id, name=bridge_name(name), level=CATEGORY_LEVEL, image_url=image)
            db.add(bridge)
            await db.flush()
            bridge_by_legacy_category[int(legacy["id"])] = bridge.id
            report.generals += 1
            report.bridges += 1

        subcategory_by_legacy_id: Dict[int, int] = {}
        for legacy in legacy_subcategories:
            bridge_id = bridge_by_legacy_category.get(int(legacy["category_id"] or 0))
            if bridge_id is None:
                continue
            subcategory = Category(
                parent_id=bridge_id,
                name=legacy["name"] or "",
                level=SUBCATEGORY_LEVEL,
                image_url=legacy["image"] or "",
            )
            db.add(subcategory)
            await db.flush()
            subcategory_by_legacy_id[int(legacy["id"])] = subcategory.id
            report.subcategories += 1

        for legacy in legacy_items:
            subcategory_id = subcategory_by_legacy_id.get(int(legacy["subcategory_id"] or 0))
            if subcategory_id is None:
                report.skipped_items += 1
                continue
            db.add(Item(
                subcategory_id=subcategory_id,
                name=legacy["name"] or "",
                description=legacy["description"] or "",
                price_coins=max(int(legacy["price"] or 0), 0),
                price_brl=0.0,
                quantity=max(int(legacy["quantity"] or 0), 0),
                image_url=legacy["image"] or "",
            ))
            report.items += 1

        await db.commit()
        report.migrated = True
        logger.info(f"📦 MIGRACIÓN: {report}")
        return report

    except Exception as e:
        await db.rollback()
        logger.error(f"❌ MIGRACIÓN: fallo al migrar los datos antiguos, se deshace todo: {e}", exc_info=True)
        return MigrationReport(reason=f"migration failed: {e}")
