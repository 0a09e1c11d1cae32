# backend/mercado/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para categorías,
proporcionando una capa de abstracción entre los endpoints de la API y la base de datos.

Funcionalidades principales:
- Consultas por ID, nivel y padre
- Listado completo en orden de alta (base del árbol jerárquico)
- Búsqueda por (nombre, nivel, padre) para la importación idempotente
- Altas, cambio de imagen y bajas en cascada

Convención de la raíz:
    La API usa parent_id = 0 para las categorías generales, pero en base de
    datos se guarda NULL para que la clave foránea autorreferenciada sea
    válida. Las funciones de este módulo aceptan 0 y lo traducen.
"""

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mercado.db.models.category_model import Category


def _parent_filter(parent_id: int):
    """Condición SQL para un padre dado, tratando 0 como raíz."""
    if not parent_id:
        return Category.parent_id.is_(None)
    return Category.parent_id == parent_id

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID.

    Args:
        db: Sesión de SQLAlchemy
        category_id: ID único de la categoría

    Returns:
        Objeto Category si existe, None si no se encuentra
    """
    result = await db.execute(select(Category).filter(Category.id == category_id))
    return result.scalars().first()


async def get_categories(
    db: AsyncSession,
    category_id: Optional[int] = None,
    level: Optional[int] = None,
    parent_id: Optional[int] = None,
) -> List[Category]:
    """
    Obtiene las categorías que cumplen los filtros indicados.

    Todos los filtros son opcionales y combinables. El resultado mantiene el
    orden de alta (ID creciente), que es el orden en que la semilla insertó
    el catálogo.

    Args:
        db: Sesión de SQLAlchemy
        category_id: Filtra por ID exacto
        level: Filtra por nivel (1 general, 2 categoría, 3 subcategoría)
        parent_id: Filtra por padre directo (0 = raíz)

    Returns:
        Lista de objetos Category
    """
    query = select(Category)
    if category_id is not None:
        query = query.filter(Category.id == category_id)
    if level is not None:
        query = query.filter(Category.level == level)
    if parent_id is not None:
        query = query.filter(_parent_filter(parent_id))

    result = await db.execute(query.order_by(Category.id.asc()))
    return result.scalars().all()


async def get_children_by_name(db: AsyncSession, parent_id: int) -> List[Category]:
    """Obtiene los hijos directos de una categoría ordenados alfabéticamente."""
    result = await db.execute(
        select(Category).filter(_parent_filter(parent_id)).order_by(Category.name.asc(), Category.id.asc())
    )
    return result.scalars().all()


async def get_category_by_name_level_parent(
    db: AsyncSession, name: str, level: int, parent_id: int
) -> Optional[Category]:
    """
    Busca un nodo por su clave natural (nombre, nivel, padre).

    Es la función en la que se apoya la importación idempotente de la
    semilla: si el nodo ya existe se reutiliza en lugar de duplicarlo.
    """
    result = await db.execute(
        select(Category)
        .filter(Category.name == name, Category.level == level, _parent_filter(parent_id))
        .order_by(Category.id.asc())
        .limit(1)
    )
    return result.scalars().first()


async def count_categories(db: AsyncSession) -> int:
    """Número total de categorías."""
    result = await db.execute(select(func.count(Category.id)))
    return result.scalar_one()

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_category(
    db: AsyncSession,
    name: str,
    level: int,
    parent_id: int = 0,
    image_url: str = "",
    commit: bool = True,
) -> Category:
    """
    Crea una nueva categoría en la base de datos.

    Con commit=False solo se hace flush, para que la importación de la
    semilla pueda agrupar todas las altas en una única transacción y aun así
    conocer el ID generado de cada nodo.

    Returns:
        Objeto Category recién creado con su ID asignado
    """
    db_category = Category(
        parent_id=parent_id or None,
        name=name,
        level=level,
        image_url=image_url,
    )
    db.add(db_category)
    if commit:
        await db.commit()
        await db.refresh(db_category)
    else:
        await db.flush()
    return db_category


async def update_category_image(
    db: AsyncSession, db_category: Category, image_url: str, commit: bool = True
) -> Category:
    """Reemplaza la imagen de una categoría."""
    db_category.image_url = image_url
    db.add(db_category)
    if commit:
        await db.commit()
        await db.refresh(db_category)
    else:
        await db.flush()
    return db_category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """
    Elimina una categoría de la base de datos.

    Efectos colaterales (manejados por las claves foráneas):
        - Subcategorías: se eliminan en cascada
        - Ítems que la referencian: la referencia pasa a NULL
    """
    await db.execute(delete(Category).where(Category.id == category_id))
    await db.commit()
