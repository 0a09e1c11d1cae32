"""
Endpoints REST para categorías.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from mercado.api import deps
from mercado.schemas import category_schema
from mercado.schemas.common_schema import CreatedResponse, SuccessResponse
from mercado.services.category_service import category_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=None)
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
    id: Optional[int] = None,
    level: Optional[int] = Query(default=None, ge=1, le=3),
    parent_id: Optional[int] = Query(default=None, ge=0),
    tree: int = 0,
) -> Union[List[category_schema.CategoryTreeNode], List[category_schema.CategoryResponse]]:
    """
    Lista plana de categorías filtrada por id, nivel y padre, o el árbol
    completo anidado con tree=1.
    """
    if tree == 1:
        return await category_service.get_category_tree(db)

    categories = await category_service.list_categories(db, category_id=id, level=level, parent_id=parent_id)
    return [category_schema.CategoryResponse.model_validate(c) for c in categories]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    category_in: category_schema.CategoryCreate,
) -> CreatedResponse:
    """Crea una nueva categoría en el sistema."""
    category = await category_service.create_new_category(db, category_in)
    logger.info(f"🆕 CATEGORÍA: creada '{category.name}' (nivel {category.level}) con ID {category.id}")
    return CreatedResponse(id=category.id)


@router.put("/{category_id}", response_model=SuccessResponse)
async def update_category_image(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    category_id: int,
    category_in: category_schema.CategoryImageUpdate,
) -> SuccessResponse:
    """Reemplaza la imagen de una categoría."""
    await category_service.update_category_image(db, category_id, category_in.image_url)
    logger.info(f"🔄 CATEGORÍA: imagen actualizada para ID {category_id}")
    return SuccessResponse()


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    category_id: int,
) -> SuccessResponse:
    """Elimina una categoría y toda su descendencia."""
    await category_service.delete_existing_category(db, category_id)
    logger.info(f"🗑️ CATEGORÍA: eliminada ID {category_id}")
    return SuccessResponse()
