# backend/mercado/crud/setting_crud.py
"""
Operaciones CRUD para la tabla de configuraciones clave/valor.

Las configuraciones se insertan o actualizan (upsert), nunca se borran.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mercado.db.models.setting_model import Setting


async def get_setting(db: AsyncSession, key: str, default: Optional[str] = None) -> Optional[str]:
    """Devuelve el valor de una clave, o el default si no existe."""
    result = await db.execute(select(Setting.value).filter(Setting.key == key))
    row = result.first()
    return row[0] if row is not None else default


async def set_setting(db: AsyncSession, key: str, value: str, commit: bool = True) -> Setting:
    """Inserta o actualiza el valor de una clave."""
    db_setting = await db.get(Setting, key)
    if db_setting is None:
        db_setting = Setting(key=key, value=value)
    else:
        db_setting.value = value
    db.add(db_setting)
    if commit:
        await db.commit()
    else:
        await db.flush()
    return db_setting


async def add_setting_if_missing(db: AsyncSession, key: str, value: str) -> bool:
    """Inserta la clave solo si aún no existe. Devuelve True si la creó."""
    if await db.get(Setting, key) is not None:
        return False
    db.add(Setting(key=key, value=value))
    await db.commit()
    return True
