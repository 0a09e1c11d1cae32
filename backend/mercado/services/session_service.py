# backend/mercado/services/session_service.py
"""
Almacén de sesiones del lado del servidor.

La cookie del navegador solo lleva el ID de sesión firmado; el estado
(si la sesión es de administrador) vive en este almacén en memoria del
proceso. Cada login genera un ID nuevo y destruye el anterior.
"""

import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from mercado.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Contexto de autenticación de una petición concreta."""
    session_id: Optional[str] = None
    is_admin: bool = False


ANONYMOUS = AuthContext()


@dataclass
class SessionData:
    is_admin: bool = False
    created_at: float = field(default_factory=time.time)


class SessionStore:
    """
    Sesiones en memoria indexadas por un ID aleatorio.

    Las sesiones caducan SESSION_MAX_AGE segundos después de crearse; las
    caducadas se eliminan al consultarlas o al crear una sesión nueva.
    """

    def __init__(self, max_age: int):
        self.max_age = max_age
        self._sessions: Dict[str, SessionData] = {}

    def create(self, is_admin: bool = False) -> str:
        """Crea una sesión nueva y devuelve su ID, purgando antes las caducadas."""
        self.purge_expired()
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = SessionData(is_admin=is_admin)
        return session_id

    def purge_expired(self) -> int:
        """Elimina las sesiones caducadas y devuelve cuántas se han borrado."""
        now = time.time()
        expired = [sid for sid, data in self._sessions.items() if now - data.created_at > self.max_age]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug(f"🧹 SESIONES: {len(expired)} sesiones caducadas eliminadas")
        return len(expired)

    def get(self, session_id: Optional[str]) -> Optional[SessionData]:
        """Devuelve la sesión si existe y no ha caducado."""
        if not session_id:
            return None
        data = self._sessions.get(session_id)
        if data is None:
            return None
        if time.time() - data.created_at > self.max_age:
            self.destroy(session_id)
            return None
        return data

    def destroy(self, session_id: Optional[str]) -> None:
        if session_id:
            self._sessions.pop(session_id, None)

    def regenerate(self, old_session_id: Optional[str], is_admin: bool) -> str:
        """Destruye la sesión anterior y crea otra con un ID nuevo."""
        self.destroy(old_session_id)
        return self.create(is_admin=is_admin)

    def resolve(self, session_id: Optional[str]) -> AuthContext:
        """Traduce un ID de sesión al contexto de autenticación de la petición."""
        data = self.get(session_id)
        if data is None:
            return ANONYMOUS
        return AuthContext(session_id=session_id, is_admin=data.is_admin)

    def clear(self) -> None:
        self._sessions.clear()


# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

session_store = SessionStore(max_age=settings.SESSION_MAX_AGE)
