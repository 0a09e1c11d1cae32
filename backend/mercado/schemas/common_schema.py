# backend/mercado/schemas/common_schema.py
"""
Sobres de respuesta compartidos por todos los endpoints.

Toda mutación exitosa responde con `success: true` y todo error con
`success: false` más un mensaje, de modo que el cliente pueda distinguir
ambas formas solo mirando el discriminador.
"""

from typing import Any, Literal, Optional
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Respuesta genérica de una operación de escritura exitosa."""
    success: Literal[True] = True


class CreatedResponse(SuccessResponse):
    """Respuesta de creación: incluye el ID generado."""
    id: int


class ErrorResponse(BaseModel):
    """Forma única de todos los errores de la API."""
    success: Literal[False] = False
    error: str
    details: Optional[Any] = None
