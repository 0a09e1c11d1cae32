# backend/mercado/db/models/item_model.py
from sqlalchemy import Column, Integer, String, ForeignKey, Text, Float

from mercado.db.database import Base


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Solo una de las tres referencias es autoritativa (ver item_service.apply_ancestor_dominance)
    subcategory_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    general_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="")
    price_coins = Column(Integer, nullable=False, default=0)
    price_brl = Column(Float, nullable=False, default=0.0)
    quantity = Column(Integer, nullable=False, default=0)
    image_url = Column(Text, nullable=True, default="")
