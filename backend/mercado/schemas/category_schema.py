# backend/mercado/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryImageUpdate: Para reemplazar la imagen de una categoría (PUT)
- CategoryResponse: Para respuestas de la API (GET)
- CategoryTreeNode: Nodo del árbol anidado (GET ?tree=1)
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str = Field(min_length=1, max_length=255)
    level: int = Field(ge=1, le=3)
    parent_id: int = 0  # 0 para las categorías generales (raíz)
    image_url: str = ""

    @field_validator("parent_id", mode="before")
    @classmethod
    def _root_as_zero(cls, value: Optional[int]) -> int:
        # En base de datos la raíz se guarda como NULL
        return 0 if value is None else value

    @field_validator("image_url", mode="before")
    @classmethod
    def _empty_image(cls, value: Optional[str]) -> str:
        return value or ""


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear una nueva categoría. El ID lo genera la base de datos."""

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class CategoryImageUpdate(BaseModel):
    """Esquema para reemplazar la imagen de una categoría."""
    image_url: str

    @field_validator("image_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("image_url must not be empty")
        return value


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryTreeNode(CategoryResponse):
    """Categoría con sus hijos directos anidados."""
    children: List["CategoryTreeNode"] = []


CategoryTreeNode.model_rebuild()
