# backend/mercado/schemas/upload_schema.py
from mercado.schemas.common_schema import SuccessResponse


class UploadResponse(SuccessResponse):
    """Ruta pública relativa de la imagen guardada, p. ej. images/uploads/x.png"""
    path: str
