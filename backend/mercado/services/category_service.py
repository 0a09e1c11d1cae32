# backend/mercado/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio para el manejo de categorías,
incluyendo la construcción del árbol jerárquico de tres niveles, la validación de
la coherencia nivel/padre y la limpieza de imágenes reemplazadas.
"""

import logging
from typing import Dict, Iterable, List, Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from mercado.crud import category_crud
from mercado.db.models.category_model import Category, GENERAL_LEVEL
from mercado.schemas import category_schema
from mercado.services.upload_service import upload_service

logger = logging.getLogger(__name__)


def build_category_tree(rows: Iterable[Category]) -> List[category_schema.CategoryTreeNode]:
    """
    Construye el bosque de categorías a partir de filas planas.

    Primera pasada: indexa cada fila por ID con una lista de hijos vacía.
    Segunda pasada: cuelga cada nodo de su padre, o lo deja como raíz si su
    parent_id es 0 o el padre no está entre las filas. El orden entre
    hermanos es el orden de entrada. No se detectan ciclos: los datos los
    introduce el administrador.
    """
    nodes: Dict[int, category_schema.CategoryTreeNode] = {}
    for row in rows:
        nodes[row.id] = category_schema.CategoryTreeNode(
            id=row.id,
            parent_id=row.parent_id,
            name=row.name,
            level=row.level,
            image_url=row.image_url,
            children=[],
        )

    tree: List[category_schema.CategoryTreeNode] = []
    for node in nodes.values():
        parent = nodes.get(node.parent_id) if node.parent_id else None
        if parent is not None:
            parent.children.append(node)
        else:
            tree.append(node)
    return tree


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Características:
    - Listados filtrados y árbol anidado
    - Verificación de la jerarquía fija general > categoría > subcategoría
    - Reemplazo de imagen con borrado de la anterior
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category_by_id(self, db: AsyncSession, category_id: int) -> Optional[Category]:
        return await category_crud.get_category(db, category_id=category_id)

    async def list_categories(
        self,
        db: AsyncSession,
        category_id: Optional[int] = None,
        level: Optional[int] = None,
        parent_id: Optional[int] = None,
    ) -> List[Category]:
        """Listado plano filtrado, en orden de alta."""
        return await category_crud.get_categories(db, category_id=category_id, level=level, parent_id=parent_id)

    async def get_category_tree(self, db: AsyncSession) -> List[category_schema.CategoryTreeNode]:
        """Árbol completo en el orden de alta, que refleja el orden de la semilla."""
        rows = await category_crud.get_categories(db)
        return build_category_tree(rows)

    async def get_subcategories(self, db: AsyncSession, parent_id: int) -> List[Category]:
        """Hijos directos de una categoría, ordenados por nombre."""
        return await category_crud.get_children_by_name(db, parent_id=parent_id)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def _validate_parent(self, db: AsyncSession, level: int, parent_id: int) -> None:
        """
        Comprueba que el padre encaja con el nivel:
        las generales no tienen padre y el resto cuelga de un nodo del nivel anterior.
        """
        if level == GENERAL_LEVEL:
            if parent_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="A level 1 category cannot have a parent.",
                )
            return

        if not parent_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"A level {level} category requires a parent_id.",
            )
        parent = await category_crud.get_category(db, category_id=parent_id)
        if not parent:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Parent category with id {parent_id} not found.",
            )
        if parent.level != level - 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Parent of a level {level} category must be level {level - 1}.",
            )

    async def create_new_category(self, db: AsyncSession, category_in: category_schema.CategoryCreate) -> Category:
        """
        Crea una nueva categoría validando nivel, padre y duplicados.

        Raises:
            HTTPException 400 si el nivel no encaja con el padre,
            404 si el padre no existe, 409 si ya existe el mismo nombre bajo ese padre.
        """
        await self._validate_parent(db, category_in.level, category_in.parent_id)

        existing = await category_crud.get_category_by_name_level_parent(
            db, name=category_in.name, level=category_in.level, parent_id=category_in.parent_id
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Category '{category_in.name}' already exists under the specified parent.",
            )

        return await category_crud.create_category(
            db,
            name=category_in.name,
            level=category_in.level,
            parent_id=category_in.parent_id,
            image_url=category_in.image_url,
        )

    async def update_category_image(self, db: AsyncSession, category_id: int, image_url: str) -> Category:
        """
        Reemplaza la imagen de una categoría y borra la anterior si era una subida local.
        """
        db_category = await self.get_category_by_id(db, category_id)
        if not db_category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

        old_image = db_category.image_url
        updated = await category_crud.update_category_image(db, db_category, image_url)

        cleanup = upload_service.discard_replaced_upload(old_image, image_url)
        logger.debug(f"🧹 CATEGORÍA {category_id}: limpieza de imagen -> {cleanup}")
        return updated

    async def delete_existing_category(self, db: AsyncSession, category_id: int) -> None:
        """
        Elimina una categoría y, en cascada, toda su descendencia.
        Los ítems que la referenciaban quedan con esa referencia a NULL.
        """
        category = await self.get_category_by_id(db, category_id)
        if not category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Category with id {category_id} not found.")

        await category_crud.delete_category(db, category_id=category_id)

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

category_service = CategoryService()
