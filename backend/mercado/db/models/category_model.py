# backend/mercado/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría jerárquica de la aplicación.

Niveles: 1 = general, 2 = categoría, 3 = subcategoría.
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from mercado.db.database import Base

GENERAL_LEVEL = 1
CATEGORY_LEVEL = 2
SUBCATEGORY_LEVEL = 3


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # NULL en base de datos para las raíces; la API lo expone como 0
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    level = Column(Integer, nullable=False, index=True)
    image_url = Column(Text, nullable=True, default="")
