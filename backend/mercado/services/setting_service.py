# backend/mercado/services/setting_service.py
"""
Servicio para las configuraciones de la tienda.

Solo las claves de PUBLIC_KEYS se leen y escriben a través de la API; el hash
de la contraseña del administrador se gestiona aparte y nunca se expone.
"""

import logging

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from mercado.core.config import settings
from mercado.core.security import get_password_hash
from mercado.crud import setting_crud
from mercado.db.models.setting_model import (
    ADMIN_PASSWORD_HASH_KEY,
    CORNER_IMAGE_KEY,
    WHATSAPP_NUMBER_KEY,
)
from mercado.schemas import setting_schema

logger = logging.getLogger(__name__)

PUBLIC_KEYS = (CORNER_IMAGE_KEY, WHATSAPP_NUMBER_KEY)
LEGACY_CORNER_IMAGE = "images/cantoneira.png"


class SettingService:

    def _default_for(self, key: str) -> str:
        return settings.DEFAULT_CORNER_IMAGE if key == CORNER_IMAGE_KEY else ""

    async def get_public_settings(self, db: AsyncSession) -> setting_schema.SettingsResponse:
        values = {}
        for key in PUBLIC_KEYS:
            values[key] = await setting_crud.get_setting(db, key, self._default_for(key))
        return setting_schema.SettingsResponse(**values)

    async def update_settings(self, db: AsyncSession, update_in: setting_schema.SettingsUpdate) -> None:
        """
        Guarda las claves públicas recibidas y, opcionalmente, rota la
        contraseña del administrador.

        La contraseña se valida antes de escribir nada, de modo que una
        contraseña demasiado corta no deja la actualización a medias.
        """
        new_password = update_in.new_admin_password
        if new_password and len(new_password) < settings.ADMIN_PASSWORD_MIN_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Password must have at least {settings.ADMIN_PASSWORD_MIN_LENGTH} characters",
            )

        data = update_in.model_dump(exclude_unset=True, exclude={"new_admin_password"})
        for key in PUBLIC_KEYS:
            if key in data and data[key] is not None:
                await setting_crud.set_setting(db, key, str(data[key]), commit=False)

        if new_password:
            await setting_crud.set_setting(db, ADMIN_PASSWORD_HASH_KEY, get_password_hash(new_password), commit=False)
            logger.info("🔐 AJUSTES: contraseña de administrador actualizada")

        await db.commit()

    async def ensure_defaults(self, db: AsyncSession) -> None:
        """
        Garantiza la imagen de esquina por defecto y corrige el valor antiguo
        sin '../', que no resolvía desde la hoja de estilos.
        """
        await setting_crud.add_setting_if_missing(db, CORNER_IMAGE_KEY, settings.DEFAULT_CORNER_IMAGE)
        current = await setting_crud.get_setting(db, CORNER_IMAGE_KEY, "")
        if current == LEGACY_CORNER_IMAGE:
            await setting_crud.set_setting(db, CORNER_IMAGE_KEY, settings.DEFAULT_CORNER_IMAGE)

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

setting_service = SettingService()
