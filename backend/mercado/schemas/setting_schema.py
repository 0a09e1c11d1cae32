# backend/mercado/schemas/setting_schema.py
"""
Esquemas para las configuraciones públicas y su actualización.
"""

from typing import Optional
from pydantic import BaseModel


class SettingsResponse(BaseModel):
    """Claves públicas; el hash de la contraseña nunca se expone."""
    corner_image_url: str
    whatsapp_number: str


class SettingsUpdate(BaseModel):
    """Todas las claves son opcionales; solo se guardan las enviadas."""
    corner_image_url: Optional[str] = None
    whatsapp_number: Optional[str] = None
    new_admin_password: Optional[str] = None
