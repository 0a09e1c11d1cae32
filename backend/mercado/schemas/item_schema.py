# backend/mercado/schemas/item_schema.py

"""
Esquemas Pydantic para el modelo Item.

Un ítem puede colgar de una subcategoría, de una categoría o directamente de
una categoría general. Los esquemas de escritura aceptan las tres
referencias y normalizan 0 a None; la regla de dominancia se aplica en
item_service.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# ========================================
# ESQUEMA BASE
# ========================================

class ItemBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de ítem."""
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    price_coins: int = 0
    price_brl: float = 0.0
    quantity: int = 0
    image_url: str = ""

    @field_validator("description", "image_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Optional[str]) -> str:
        return value or ""


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ItemWrite(ItemBase):
    """
    Esquema para crear o actualizar un ítem (POST / PUT).

    Las referencias de ancestros llegan tal cual las envía el formulario;
    un 0 o un valor vacío significa "sin referencia".
    """
    price_coins: int = Field(default=0, ge=0)
    price_brl: float = Field(default=0.0, ge=0)
    quantity: int = Field(default=0, ge=0)
    subcategory_id: Optional[int] = None
    category_id: Optional[int] = None
    general_id: Optional[int] = None

    @field_validator("subcategory_id", "category_id", "general_id", mode="before")
    @classmethod
    def _zero_as_none(cls, value):
        if value in (None, "", 0, "0"):
            return None
        return value


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ItemResponse(ItemBase):
    """
    Ítem con sus ancestros efectivos ya resueltos.

    Ejemplo de respuesta:
    {
        "id": 7,
        "subcategory_id": 12, "category_id": null, "general_id": null,
        "name": "Espada", ...,
        "subcategory_name": "Armas",
        "effective_category_id": 5, "effective_category_name": "Equipamento",
        "effective_general_id": 1, "effective_general_name": "RPG"
    }
    """
    id: int
    name: str
    subcategory_id: Optional[int] = None
    category_id: Optional[int] = None
    general_id: Optional[int] = None
    subcategory_name: Optional[str] = None
    effective_category_id: Optional[int] = None
    effective_category_name: Optional[str] = None
    effective_general_id: Optional[int] = None
    effective_general_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
