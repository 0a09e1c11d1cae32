# backend/mercado/db/models/setting_model.py
"""
Configuraciones generales de la tienda en formato clave/valor.
"""

from sqlalchemy import Column, String, Text
from mercado.db.database import Base

CORNER_IMAGE_KEY = "corner_image_url"
WHATSAPP_NUMBER_KEY = "whatsapp_number"
ADMIN_PASSWORD_HASH_KEY = "admin_password_hash"


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
