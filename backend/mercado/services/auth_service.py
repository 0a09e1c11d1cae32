# backend/mercado/services/auth_service.py
"""
Autenticación del único administrador de la tienda.

Máquina de dos estados por sesión: anónima y administrador. Se pasa a
administrador con la contraseña correcta (hash bcrypt guardado en las
configuraciones, o la contraseña por defecto mientras no exista hash) y se
vuelve a anónima con el logout o cuando la sesión caduca.
"""

import hmac
import logging

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from mercado.core.config import settings
from mercado.core.security import verify_password
from mercado.crud import setting_crud
from mercado.db.models.setting_model import ADMIN_PASSWORD_HASH_KEY
from mercado.services.session_service import AuthContext, SessionStore, session_store

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, store: SessionStore):
        self.store = store

    async def check_password(self, db: AsyncSession, password: str) -> bool:
        """Compara con el hash guardado o, si no hay, con la contraseña por defecto."""
        stored_hash = await setting_crud.get_setting(db, ADMIN_PASSWORD_HASH_KEY, "")
        if stored_hash:
            return verify_password(password, stored_hash)
        return hmac.compare_digest(password.encode("utf-8"), settings.ADMIN_DEFAULT_PASSWORD.encode("utf-8"))

    async def login(self, db: AsyncSession, auth: AuthContext, password: str) -> str:
        """
        Valida la contraseña y abre una sesión de administrador.

        El ID de sesión se regenera siempre que el login tiene éxito, para
        evitar la fijación de sesión.

        Returns:
            ID de la nueva sesión

        Raises:
            HTTPException 400 si no llega contraseña, 401 si es incorrecta.
        """
        if not password:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password not provided")

        if not await self.check_password(db, password):
            logger.warning("⚠️ AUTH: intento de login con contraseña incorrecta")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")

        session_id = self.store.regenerate(auth.session_id, is_admin=True)
        logger.info("🔐 AUTH: sesión de administrador iniciada")
        return session_id

    def logout(self, auth: AuthContext) -> None:
        self.store.destroy(auth.session_id)
        logger.info("🔓 AUTH: sesión cerrada")

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

auth_service = AuthService(session_store)
