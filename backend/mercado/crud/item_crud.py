# backend/mercado/crud/item_crud.py

"""
Operaciones CRUD para el modelo Item.

El punto delicado de este módulo es la resolución de ancestros: un ítem guarda
una sola referencia (subcategoría, categoría o general) y las lecturas deben
devolver siempre la categoría y la general efectivas. La resolución se hace en
cada consulta con LEFT JOINs sobre la tabla de categorías y COALESCE, dando
prioridad a la referencia explícita frente a la derivada en cada nivel:

    categoría efectiva = categoría explícita, si no el padre de la subcategoría
    general efectiva   = general explícita, si no el padre de la categoría
                         explícita, si no el abuelo vía subcategoría
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from mercado.db.models.category_model import Category
from mercado.db.models.item_model import Item

# Alias de la tabla de categorías para cada camino de resolución
_sub = aliased(Category, name="sub")
_cat_from_sub = aliased(Category, name="cat_from_sub")
_general_from_sub = aliased(Category, name="general_from_sub")
_cat_explicit = aliased(Category, name="cat_explicit")
_general_from_cat = aliased(Category, name="general_from_cat")
_general_explicit = aliased(Category, name="general_explicit")

_effective_category_id = func.coalesce(_cat_explicit.id, _cat_from_sub.id)
_effective_category_name = func.coalesce(_cat_explicit.name, _cat_from_sub.name)
_effective_general_id = func.coalesce(_general_explicit.id, _general_from_cat.id, _general_from_sub.id)
_effective_general_name = func.coalesce(_general_explicit.name, _general_from_cat.name, _general_from_sub.name)
_derived_general_id = func.coalesce(_general_from_cat.id, _general_from_sub.id)

_ITEM_FIELDS = (
    "id", "subcategory_id", "category_id", "general_id", "name", "description",
    "price_coins", "price_brl", "quantity", "image_url",
)


def _items_with_relations_query():
    """Consulta base: ítems con sus ancestros efectivos ya resueltos."""
    return (
        select(
            Item,
            _sub.name.label("subcategory_name"),
            _effective_category_id.label("effective_category_id"),
            _effective_category_name.label("effective_category_name"),
            _effective_general_id.label("effective_general_id"),
            _effective_general_name.label("effective_general_name"),
        )
        .select_from(Item)
        .outerjoin(_sub, _sub.id == Item.subcategory_id)
        .outerjoin(_cat_from_sub, _cat_from_sub.id == _sub.parent_id)
        .outerjoin(_general_from_sub, _general_from_sub.id == _cat_from_sub.parent_id)
        .outerjoin(_cat_explicit, _cat_explicit.id == Item.category_id)
        .outerjoin(_general_from_cat, _general_from_cat.id == _cat_explicit.parent_id)
        .outerjoin(_general_explicit, _general_explicit.id == Item.general_id)
    )


def _row_to_dict(row) -> Dict[str, Any]:
    item = row.Item
    data = {field: getattr(item, field) for field in _ITEM_FIELDS}
    data.update(
        subcategory_name=row.subcategory_name,
        effective_category_id=row.effective_category_id,
        effective_category_name=row.effective_category_name,
        effective_general_id=row.effective_general_id,
        effective_general_name=row.effective_general_name,
    )
    return data

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_item(db: AsyncSession, item_id: int) -> Optional[Item]:
    """Obtiene la fila cruda de un ítem por su ID."""
    result = await db.execute(select(Item).filter(Item.id == item_id))
    return result.scalars().first()


async def get_item_with_relations(db: AsyncSession, item_id: int) -> Optional[Dict[str, Any]]:
    """Obtiene un ítem con sus ancestros efectivos, o None si no existe."""
    result = await db.execute(_items_with_relations_query().filter(Item.id == item_id))
    row = result.first()
    return _row_to_dict(row) if row else None


async def get_items(
    db: AsyncSession,
    subcategory_id: Optional[int] = None,
    category_id: Optional[int] = None,
    general_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Obtiene ítems filtrados por un nivel de la jerarquía.

    Solo se aplica el primer filtro presente, en este orden:
        - subcategory_id: referencia directa a la subcategoría
        - category_id: categoría efectiva (explícita o derivada de la subcategoría)
        - general_id: general explícita, o derivada de la categoría/subcategoría

    Así, con category_id=5 aparecen tanto los ítems que guardan category_id=5
    como los que guardan una subcategoría cuyo padre es la categoría 5.

    Returns:
        Lista de diccionarios listos para ItemResponse, en orden de alta
    """
    query = _items_with_relations_query()

    if subcategory_id:
        query = query.filter(Item.subcategory_id == subcategory_id)
    elif category_id:
        query = query.filter(_effective_category_id == category_id)
    elif general_id:
        query = query.filter(or_(Item.general_id == general_id, _derived_general_id == general_id))

    result = await db.execute(query.order_by(Item.id.asc()))
    return [_row_to_dict(row) for row in result.all()]


async def count_items(db: AsyncSession) -> int:
    """Número total de ítems."""
    result = await db.execute(select(func.count(Item.id)))
    return result.scalar_one()

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_item(db: AsyncSession, item_data: Dict[str, Any]) -> Item:
    """
    Crea un nuevo ítem.

    Se espera que item_data ya tenga aplicada la regla de dominancia de
    ancestros (ver item_service).
    """
    db_item = Item(**item_data)
    db.add(db_item)
    await db.commit()
    await db.refresh(db_item)
    return db_item


async def update_item(db: AsyncSession, db_item: Item, item_data: Dict[str, Any]) -> Item:
    """Sobrescribe todos los campos del ítem con los valores recibidos."""
    for key, value in item_data.items():
        setattr(db_item, key, value)

    db.add(db_item)
    await db.commit()
    await db.refresh(db_item)
    return db_item


async def delete_item(db: AsyncSession, db_item: Item) -> None:
    """Elimina un ítem de la base de datos."""
    await db.delete(db_item)
    await db.commit()
