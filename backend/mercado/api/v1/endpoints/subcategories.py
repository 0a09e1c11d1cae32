"""
Endpoint de solo lectura con los hijos directos de una categoría.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mercado.api import deps
from mercado.schemas import category_schema
from mercado.services.category_service import category_service

router = APIRouter()


@router.get("", response_model=List[category_schema.CategoryResponse])
async def read_subcategories(
    db: AsyncSession = Depends(deps.get_db),
    category_id: int = Query(default=0, ge=0),
) -> List[category_schema.CategoryResponse]:
    """Hijos directos de category_id ordenados por nombre (0 = generales)."""
    return await category_service.get_subcategories(db, parent_id=category_id)
