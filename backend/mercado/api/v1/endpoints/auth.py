# backend/mercado/api/v1/endpoints/auth.py

"""
Endpoints de autenticación del administrador: login, logout y check.
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from mercado.api import deps
from mercado.schemas.auth_schema import AuthCheckResponse
from mercado.schemas.common_schema import SuccessResponse
from mercado.services.auth_service import auth_service
from mercado.services.session_service import AuthContext

router = APIRouter()


async def extract_password(request: Request) -> str:
    """
    Obtiene la contraseña del cuerpo JSON, del formulario o, como último
    recurso, del parámetro de consulta `password`.
    """
    password = ""
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            data = {}
        if isinstance(data, dict):
            password = str(data.get("password") or "")
    elif "application/x-www-form-urlencoded" in content_type or "multipart/form-data" in content_type:
        form = await request.form()
        password = str(form.get("password") or "")

    if not password:
        password = request.query_params.get("password", "")
    return password


@router.post("/login", response_model=SuccessResponse)
async def login(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(deps.get_db),
    auth: AuthContext = Depends(deps.get_auth_context),
) -> SuccessResponse:
    """Abre una sesión de administrador con un ID de sesión nuevo."""
    password = await extract_password(request)
    session_id = await auth_service.login(db, auth, password)
    deps.set_session_cookie(response, session_id)
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    auth: AuthContext = Depends(deps.get_auth_context),
) -> SuccessResponse:
    """Cierra la sesión actual, sea cual sea su estado."""
    auth_service.logout(auth)
    deps.clear_session_cookie(response)
    return SuccessResponse()


@router.get("/check", response_model=AuthCheckResponse)
async def check(auth: AuthContext = Depends(deps.get_auth_context)) -> AuthCheckResponse:
    return AuthCheckResponse(is_admin=auth.is_admin)
