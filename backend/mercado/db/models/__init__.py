from mercado.db.models.category_model import Category
from mercado.db.models.item_model import Item
from mercado.db.models.setting_model import Setting

__all__ = ["Category", "Item", "Setting"]
