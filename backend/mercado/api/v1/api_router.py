# backend/mercado/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por recurso
from mercado.api.v1.endpoints import (
    auth,
    categories,
    items,
    seed,
    settings,
    subcategories,
    upload,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR RECURSO
# ========================================

# Árbol de categorías de tres niveles: lectura pública, cambios solo admin
api_router_v1.include_router(categories.router, prefix="/categories", tags=["Categories"])

# Hijos directos de una categoría (solo lectura)
api_router_v1.include_router(subcategories.router, prefix="/subcategories", tags=["Categories"])

# Ítems con resolución de ancestros
api_router_v1.include_router(items.router, prefix="/items", tags=["Items"])

# Configuraciones públicas y cambio de contraseña
api_router_v1.include_router(settings.router, prefix="/settings", tags=["Settings"])

# Login / logout / check del administrador
api_router_v1.include_router(auth.router, prefix="/auth", tags=["Auth"])

# Subida de imágenes
api_router_v1.include_router(upload.router, prefix="/upload", tags=["Upload"])

# Importación idempotente de la semilla de categorías
api_router_v1.include_router(seed.router, prefix="/seed_categories", tags=["Seed"])
