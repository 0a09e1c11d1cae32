# backend/mercado/schemas/seed_schema.py

"""
Esquemas para la importación de la semilla de categorías.

El fichero de semilla es una lista de categorías generales, cada una con sus
categorías y subcategorías anidadas en `children`. Se aceptan también las
claves del formato antiguo (`nome`, `imagem_url`, `filhos`).
"""

from typing import List
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from mercado.schemas.common_schema import SuccessResponse


class SeedNode(BaseModel):
    """Nodo del árbol a importar."""
    name: str = Field(default="", validation_alias=AliasChoices("name", "nome"))
    image_url: str = Field(default="", validation_alias=AliasChoices("image_url", "imagem_url"))
    children: List["SeedNode"] = Field(default_factory=list, validation_alias=AliasChoices("children", "filhos"))

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", "image_url", mode="before")
    @classmethod
    def _strip(cls, value) -> str:
        return str(value or "").strip()


SeedNode.model_rebuild()


class SeedReport(SuccessResponse):
    """Contadores de la importación."""
    created: int = 0
    reused: int = 0
    updated: int = 0
