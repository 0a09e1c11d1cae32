# backend/mercado/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: la sesión de base de datos, la configuración,
el contexto de autenticación de la petición y la comprobación de que la
petición viene de un administrador.
"""

from typing import AsyncGenerator
from fastapi import Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from mercado.core.config import settings
from mercado.core.security import sign_session_id
from mercado.db.database import AsyncSessionLocal
from mercado.services.session_service import ANONYMOUS, AuthContext


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_settings():
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings


def get_auth_context(request: Request) -> AuthContext:
    """
    Contexto de autenticación que el SessionAuthMiddleware dejó en la petición.
    Sin middleware (o sin sesión) la petición es anónima.
    """
    return getattr(request.state, "auth", ANONYMOUS)


def require_admin(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    """Permite el paso solo a sesiones de administrador; si no, 401."""
    if not auth.is_admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return auth


def set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_id(session_id),
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
