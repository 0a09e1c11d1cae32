"""
Endpoints de configuración de la tienda.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mercado.api import deps
from mercado.schemas import setting_schema
from mercado.schemas.common_schema import SuccessResponse
from mercado.services.setting_service import setting_service

router = APIRouter()


@router.get("", response_model=setting_schema.SettingsResponse)
async def read_settings(db: AsyncSession = Depends(deps.get_db)) -> setting_schema.SettingsResponse:
    """Configuraciones públicas. El hash de la contraseña nunca se incluye."""
    return await setting_service.get_public_settings(db)


@router.api_route("", methods=["PUT", "POST"], response_model=SuccessResponse)
async def update_settings(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin=Depends(deps.require_admin),
    settings_in: setting_schema.SettingsUpdate,
) -> SuccessResponse:
    """Actualiza las configuraciones públicas y, opcionalmente, la contraseña."""
    await setting_service.update_settings(db, settings_in)
    return SuccessResponse()
