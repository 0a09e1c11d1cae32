# backend/mercado/services/seed_service.py
"""
Importación idempotente del árbol de categorías desde la semilla.

Cada nodo se busca por su clave natural (nombre, nivel, padre): si existe se
reutiliza y, si la semilla trae una imagen distinta, se actualiza; si no
existe se crea. Toda la importación va en una única transacción, así que
ante cualquier fallo no queda nada a medias. Ejecutar dos veces la misma
semilla no crea nada nuevo en la segunda pasada.
"""

import json
import logging
from pathlib import Path
from typing import List

from fastapi import HTTPException
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from mercado.crud import category_crud
from mercado.db.models.category_model import CATEGORY_LEVEL, GENERAL_LEVEL, SUBCATEGORY_LEVEL
from mercado.schemas.seed_schema import SeedNode, SeedReport

logger = logging.getLogger(__name__)

_seed_adapter = TypeAdapter(List[SeedNode])


def load_seed_file(path: Path) -> List[SeedNode]:
    """
    Lee y valida el fichero de semilla.

    Raises:
        HTTPException 404 si el fichero no existe, 400 si el JSON no es válido.
    """
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Seed file not found at {path.name}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return _seed_adapter.validate_python(raw)
    except (ValueError, ValidationError) as e:
        logger.error(f"❌ SEMILLA: JSON inválido en {path}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid JSON in {path.name}")


class SeedService:

    async def _upsert_node(self, db: AsyncSession, node: SeedNode, level: int, parent_id: int, report: SeedReport) -> int:
        if level < GENERAL_LEVEL or level > SUBCATEGORY_LEVEL:
            raise ValueError(f"Invalid level: {level}")
        if not node.name:
            raise ValueError("Every seed node needs a name")

        found = await category_crud.get_category_by_name_level_parent(db, node.name, level, parent_id)
        if found:
            report.reused += 1
            if node.image_url and found.image_url != node.image_url:
                await category_crud.update_category_image(db, found, node.image_url, commit=False)
                report.updated += 1
            return found.id

        created = await category_crud.create_category(
            db, name=node.name, level=level, parent_id=parent_id, image_url=node.image_url, commit=False
        )
        report.created += 1
        return created.id

    async def import_tree(self, db: AsyncSession, generals: List[SeedNode]) -> SeedReport:
        """
        Aplica la semilla completa en una transacción.

        Raises:
            HTTPException 400 si un nodo no es válido, 500 si falla la base de datos.
            En ambos casos se deshace todo lo aplicado.
        """
        report = SeedReport()
        try:
            for general in generals:
                general_id = await self._upsert_node(db, general, GENERAL_LEVEL, 0, report)
                for category in general.children:
                    category_id = await self._upsert_node(db, category, CATEGORY_LEVEL, general_id, report)
                    for subcategory in category.children:
                        await self._upsert_node(db, subcategory, SUBCATEGORY_LEVEL, category_id, report)
            await db.commit()
        except ValueError as e:
            await db.rollback()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Failed to apply seed: {e}")
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"❌ SEMILLA: fallo al aplicar la semilla: {e}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to apply seed: {e}")

        logger.info(f"🌱 SEMILLA: creados={report.created} reutilizados={report.reused} actualizados={report.updated}")
        return report

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

seed_service = SeedService()
