"""
Endpoint de subida de imágenes (solo administrador).
"""

from fastapi import APIRouter, Depends, File, UploadFile

from mercado.api import deps
from mercado.schemas.upload_schema import UploadResponse
from mercado.services.upload_service import upload_service

router = APIRouter()


@router.post("", response_model=UploadResponse)
async def upload_image(
    _admin=Depends(deps.require_admin),
    file: UploadFile = File(...),
) -> UploadResponse:
    """Guarda una imagen JPEG, PNG o WEBP y devuelve su ruta pública."""
    path = await upload_service.save_image(file)
    return UploadResponse(path=path)
