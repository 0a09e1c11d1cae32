"""
Endpoint de importación de la semilla de categorías.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mercado.api import deps
from mercado.core.config import Settings
from mercado.schemas.seed_schema import SeedNode, SeedReport
from mercado.services.seed_service import load_seed_file, seed_service

router = APIRouter()


@router.post("", response_model=SeedReport)
async def seed_categories(
    db: AsyncSession = Depends(deps.get_db),
    settings: Settings = Depends(deps.get_settings),
    _admin=Depends(deps.require_admin),
    nodes: Optional[List[SeedNode]] = Body(default=None),
) -> SeedReport:
    """
    Importa el árbol de categorías de forma idempotente.

    Si el cuerpo trae un árbol se importa ese; si no, se lee el fichero
    configurado en SEED_FILE_PATH.
    """
    if nodes is None:
        nodes = load_seed_file(settings.SEED_FILE_PATH)
    return await seed_service.import_tree(db, nodes)
