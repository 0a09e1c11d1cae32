# backend/mercado/middleware/session_middleware.py
"""
Middleware que resuelve la sesión de cada petición.

Lee la cookie firmada, busca la sesión en el almacén del servidor y deja
en request.state.auth un AuthContext inmutable. Los endpoints no consultan
ningún estado global: reciben el contexto vía dependencias (deps.require_admin).
"""

import logging
from typing import Any, Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from mercado.core.config import settings
from mercado.core.security import unsign_session_id
from mercado.services.session_service import SessionStore, session_store

logger = logging.getLogger(__name__)


class SessionAuthMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: Any, store: SessionStore = session_store):
        super().__init__(app)
        self.store = store

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        cookie_value = request.cookies.get(settings.SESSION_COOKIE_NAME)
        session_id = unsign_session_id(cookie_value) if cookie_value else None
        request.state.auth = self.store.resolve(session_id)
        return await call_next(request)
