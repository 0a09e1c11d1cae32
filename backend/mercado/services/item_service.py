# backend/mercado/services/item_service.py

"""
Capa de servicios para operaciones de negocio relacionadas con ítems.

Responsabilidades principales:
- Regla de dominancia de ancestros al escribir: un ítem guarda una sola
  referencia autoritativa (subcategoría > categoría > general)
- Verificación de que la referencia existe y es del nivel correcto
- Orquestación del reemplazo de imagen con borrado de la anterior
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from mercado.crud import category_crud, item_crud
from mercado.db.models.category_model import CATEGORY_LEVEL, GENERAL_LEVEL, SUBCATEGORY_LEVEL
from mercado.schemas import item_schema
from mercado.services.upload_service import upload_service

logger = logging.getLogger(__name__)

AncestorRefs = Tuple[Optional[int], Optional[int], Optional[int]]


def apply_ancestor_dominance(
    subcategory_id: Optional[int],
    category_id: Optional[int],
    general_id: Optional[int],
) -> AncestorRefs:
    """
    Deja solo la referencia más profunda de las recibidas.

    - Con subcategoría: se descartan categoría y general.
    - Sin subcategoría pero con categoría: se descarta la general.
    - Solo con general: se conserva la general.

    Raises:
        ValueError si no llega ninguna referencia.
    """
    if subcategory_id:
        return subcategory_id, None, None
    if category_id:
        return None, category_id, None
    if general_id:
        return None, None, general_id
    raise ValueError("At least one of general_id, category_id or subcategory_id is required.")


class ItemService:
    """
    Servicio para operaciones de negocio relacionadas con ítems del catálogo.
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def list_items(
        self,
        db: AsyncSession,
        subcategory_id: Optional[int] = None,
        category_id: Optional[int] = None,
        general_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        return await item_crud.get_items(
            db, subcategory_id=subcategory_id, category_id=category_id, general_id=general_id
        )

    async def get_item_details(self, db: AsyncSession, item_id: int) -> Dict[str, Any]:
        item = await item_crud.get_item_with_relations(db, item_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        return item

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def _normalized_payload(self, db: AsyncSession, item_in: item_schema.ItemWrite) -> Dict[str, Any]:
        """
        Aplica la dominancia y comprueba que la referencia que queda existe
        y pertenece al nivel que le corresponde.
        """
        try:
            subcategory_id, category_id, general_id = apply_ancestor_dominance(
                item_in.subcategory_id, item_in.category_id, item_in.general_id
            )
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        ref_id, expected_level = next(
            (ref, level)
            for ref, level in (
                (subcategory_id, SUBCATEGORY_LEVEL),
                (category_id, CATEGORY_LEVEL),
                (general_id, GENERAL_LEVEL),
            )
            if ref
        )
        ancestor = await category_crud.get_category(db, category_id=ref_id)
        if not ancestor:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Category with id {ref_id} not found.",
            )
        if ancestor.level != expected_level:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Category {ref_id} is level {ancestor.level}, expected level {expected_level}.",
            )

        payload = item_in.model_dump(exclude={"subcategory_id", "category_id", "general_id"})
        payload.update(subcategory_id=subcategory_id, category_id=category_id, general_id=general_id)
        return payload

    async def create_new_item(self, db: AsyncSession, item_in: item_schema.ItemWrite) -> int:
        """Crea un ítem y devuelve su ID."""
        payload = await self._normalized_payload(db, item_in)
        db_item = await item_crud.create_item(db, payload)
        logger.info(f"✅ ÍTEM: creado '{db_item.name}' con ID {db_item.id}")
        return db_item.id

    async def update_existing_item(self, db: AsyncSession, item_id: int, item_in: item_schema.ItemWrite) -> None:
        """
        Sobrescribe un ítem existente. Si la imagen cambió y la anterior era
        una subida local, se intenta borrar el fichero.
        """
        db_item = await item_crud.get_item(db, item_id)
        if not db_item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")

        payload = await self._normalized_payload(db, item_in)
        old_image = db_item.image_url
        await item_crud.update_item(db, db_item, payload)

        cleanup = upload_service.discard_replaced_upload(old_image, payload["image_url"])
        logger.debug(f"🧹 ÍTEM {item_id}: limpieza de imagen -> {cleanup}")

    async def delete_existing_item(self, db: AsyncSession, item_id: int) -> None:
        db_item = await item_crud.get_item(db, item_id)
        if not db_item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        await item_crud.delete_item(db, db_item)
        logger.info(f"🗑️ ÍTEM: eliminado ID {item_id}")

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

item_service = ItemService()
