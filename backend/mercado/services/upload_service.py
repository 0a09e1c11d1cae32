# backend/mercado/services/upload_service.py
"""
Servicio de subida de imágenes para la aplicación.

Valida el tamaño y el tipo real del fichero (inspeccionando su contenido con
Pillow, no el content-type ni la extensión que declara el cliente), lo guarda
con un nombre no predecible en el directorio público de subidas y devuelve
su ruta pública relativa.

También se encarga de borrar la imagen anterior cuando una categoría o un
ítem la reemplaza. Ese borrado es un efecto secundario de mejor esfuerzo:
su resultado se devuelve como CleanupResult y se registra en el log, pero
nunca hace fallar la operación principal.
"""

import io
import logging
import re
import secrets
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile
from PIL import Image
from starlette import status

from mercado.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Formato detectado por Pillow -> extensión guardada
ALLOWED_IMAGE_FORMATS = {
    "JPEG": "jpg",
    "PNG": "png",
    "WEBP": "webp",
}

PUBLIC_UPLOADS_PREFIX = "images/uploads/"
_MANAGED_PATH_RE = re.compile(r"^(?:\./|\.\./)?images/uploads/")
_RELATIVE_PREFIX_RE = re.compile(r"^(?:\./|\.\./)")


@dataclass
class CleanupResult:
    """Resultado del borrado de una imagen reemplazada."""
    path: Optional[str]
    removed: bool = False
    reason: str = ""


def detect_image_extension(data: bytes) -> Optional[str]:
    """
    Devuelve la extensión que corresponde al contenido, o None si no es una
    imagen JPEG, PNG o WEBP válida.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            image_format = img.format
            img.verify()
    except Exception as e:
        logger.debug(f"🖼️ UPLOAD: contenido no reconocido como imagen ({e})")
        return None
    return ALLOWED_IMAGE_FORMATS.get(image_format)


class UploadService:
    """
    Gestión de las imágenes subidas por el administrador.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def uploads_dir(self) -> Path:
        return self.settings.UPLOADS_DIR

    def _generate_filename(self, extension: str) -> str:
        """Nombre resistente a colisiones: fecha y hora + sufijo aleatorio."""
        return f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{secrets.token_hex(6)}.{extension}"

    async def save_image(self, file: UploadFile) -> str:
        """
        Valida y guarda una imagen subida.

        Returns:
            Ruta pública relativa, por ejemplo "images/uploads/20240101_120000_ab12cd34ef56.png"

        Raises:
            HTTPException 400 si el fichero supera el límite o no es una imagen permitida,
            HTTPException 500 si no se pudo escribir en disco.
        """
        max_bytes = self.settings.UPLOAD_MAX_BYTES
        data = await file.read(max_bytes + 1)
        if not data:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
        if len(data) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File exceeds {max_bytes // (1024 * 1024)}MB",
            )

        extension = detect_image_extension(data)
        if extension is None:
            logger.warning(f"⚠️ UPLOAD: tipo no soportado para '{file.filename}' (declarado {file.content_type})")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported file type")

        filename = self._generate_filename(extension)
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            (self.uploads_dir / filename).write_bytes(data)
        except OSError as e:
            logger.error(f"❌ UPLOAD: no se pudo guardar '{filename}': {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save file")

        logger.info(f"✅ UPLOAD: guardada imagen '{filename}' ({len(data)} bytes)")
        return PUBLIC_UPLOADS_PREFIX + filename

    def managed_file_path(self, public_path: Optional[str]) -> Optional[Path]:
        """
        Traduce una ruta pública a la ruta física si apunta al directorio de
        subidas gestionado; en cualquier otro caso devuelve None.
        """
        if not public_path:
            return None
        normalized = public_path.replace("\\", "/")
        if not _MANAGED_PATH_RE.match(normalized):
            return None

        relative = _RELATIVE_PREFIX_RE.sub("", normalized)
        full_path = (self.settings.PUBLIC_DIR / relative).resolve()
        uploads_dir = self.uploads_dir.resolve()
        if uploads_dir not in full_path.parents:
            return None
        return full_path

    def discard_replaced_upload(self, old_path: Optional[str], new_path: Optional[str]) -> CleanupResult:
        """
        Borra la imagen anterior si fue reemplazada y vive en el directorio de subidas.

        Nunca lanza excepciones: el resultado se registra y se devuelve.
        """
        if not old_path or old_path == new_path:
            return CleanupResult(path=old_path, reason="not replaced")

        full_path = self.managed_file_path(old_path)
        if full_path is None:
            return CleanupResult(path=old_path, reason="not a managed upload")
        if not full_path.is_file():
            return CleanupResult(path=old_path, reason="file not found")

        try:
            full_path.unlink()
        except OSError as e:
            logger.warning(f"⚠️ UPLOAD: no se pudo borrar la imagen anterior '{old_path}': {e}")
            return CleanupResult(path=old_path, reason=str(e))

        logger.info(f"🗑️ UPLOAD: imagen anterior borrada '{old_path}'")
        return CleanupResult(path=old_path, removed=True)


# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

upload_service = UploadService(default_settings)
