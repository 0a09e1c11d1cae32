# backend/mercado/api/v1/endpoints/items.py

"""
Endpoints REST para operaciones CRUD de ítems del catálogo.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Union
import logging

from mercado.api import deps
from mercado.schemas import item_schema
from mercado.schemas.common_schema import CreatedResponse, SuccessResponse
from mercado.services.item_service import item_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=Union[item_schema.ItemResponse, List[item_schema.ItemResponse]])
async def read_items(
    db: AsyncSession = Depends(deps.get_db),
    id: Optional[int] = Query(default=None, ge=1),
    subcategory_id: Optional[int] = Query(default=None, ge=0),
    category_id: Optional[int] = Query(default=None, ge=0),
    general_id: Optional[int] = Query(default=None, ge=0),
):
    """
    Lista ítems con sus ancestros resueltos.

    Con `id` devuelve solo ese ítem (404 si no existe), igual que
    GET /items/{id}. Si no, se aplica solo el primer filtro no nulo en el
    orden subcategoría, categoría, general. Los filtros por categoría y
    general incluyen los ítems que cuelgan de niveles más profundos.
    """
    if id is not None:
        return await item_service.get_item_details(db, id)
    logger.debug(f"📋 ÍTEMS: sub={subcategory_id} cat={category_id} general={general_id}")
    return await item_service.list_items(
        db, subcategory_id=subcategory_id, category_id=category_id, general_id=general_id
    )


@router.get("/{item_id}", response_model=item_schema.ItemResponse)
async def read_item(
    *,
    db: AsyncSession = Depends(deps.get_db),
    item_id: int,
) -> item_schema.ItemResponse:
    """Obtiene los detalles de un ítem por su ID."""
    return await item_service.get_item_details(db, item_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    item_in: item_schema.ItemWrite,
) -> CreatedResponse:
    """Crea un nuevo ítem en el catálogo."""
    logger.info(f"🆕 ÍTEM: creando '{item_in.name}'")
    item_id = await item_service.create_new_item(db, item_in)
    return CreatedResponse(id=item_id)


@router.put("/{item_id}", response_model=SuccessResponse)
async def update_item(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    item_id: int,
    item_in: item_schema.ItemWrite,
) -> SuccessResponse:
    """Actualiza un ítem existente."""
    logger.info(f"🔄 ÍTEM: actualizando ID {item_id}")
    await item_service.update_existing_item(db, item_id, item_in)
    return SuccessResponse()


@router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_item(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    item_id: int,
) -> SuccessResponse:
    """Elimina un ítem del catálogo."""
    await item_service.delete_existing_item(db, item_id)
    return SuccessResponse()
