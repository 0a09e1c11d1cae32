# backend/mercado/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación completa: middleware de
sesión y CORS, manejadores de errores, routers de la API, ficheros
estáticos (UI e imágenes) y eventos del ciclo de vida.

Características principales:
- Configuración centralizada de la aplicación
- Registro de routers de la API con prefijos
- Documentación automática (OpenAPI/Swagger)
- UI pública servida desde el mismo proceso
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from mercado.core.config import settings  # Configuración centralizada de la aplicación
from mercado.core.logging_config import configure_logging
from mercado.api.v1.api_router import api_router_v1  # Router principal de la API v1
from mercado.db.database import AsyncSessionLocal, engine
from mercado.db.init_db import init_db
from mercado.middleware.error_handler import setup_error_handlers
from mercado.middleware.session_middleware import SessionAuthMiddleware

logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API del catálogo de Mercado: categorías, ítems y administración",
)

# ========================================
# MIDDLEWARE
# ========================================

# El último middleware añadido es el más externo: CORS envuelve a la sesión
app.add_middleware(SessionAuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

app.include_router(api_router_v1, prefix=settings.API_V1_STR)


@app.get("/health", tags=["Root"])
async def health_check():
    """Comprobación básica de que el servicio responde."""
    return {"status": "ok", "name": settings.PROJECT_NAME, "version": settings.PROJECT_VERSION}


# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    """
    Prepara el logging y la carpeta de subidas antes de inicializar la base
    de datos.
    """
    configure_logging(settings)
    settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    await init_db(engine, AsyncSessionLocal)
    logger.info(f"🚀 {settings.PROJECT_NAME} v{settings.PROJECT_VERSION} iniciada ({settings.APP_ENVIRONMENT})")


@app.on_event("shutdown")
async def shutdown_event():
    await engine.dispose()
    logger.info("👋 Aplicación detenida, conexiones cerradas")


# ========================================
# FICHEROS ESTÁTICOS
# ========================================

UI_DIR = settings.PACKAGE_DIR / "static"


@app.get("/", include_in_schema=False)
async def read_ui():
    """Página única de la UI pública."""
    return FileResponse(UI_DIR / "index.html")


# Sin montaje en "/": las rutas de la API deben seguir devolviendo 405
app.mount("/css", StaticFiles(directory=UI_DIR / "css"), name="css")
app.mount("/js", StaticFiles(directory=UI_DIR / "js"), name="js")
app.mount(
    "/images",
    StaticFiles(directory=settings.PUBLIC_DIR / "images", check_dir=False),
    name="images",
)
