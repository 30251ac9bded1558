from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..schemas.item import Item
from ..utils import to_id


class ItemCatalog:
    """Acceso de solo lectura a la colección `items`."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def find_by_id(self, item_id: int) -> Optional[Item]:
        doc = await self.db.items.find_one({"_id": item_id})
        return Item(**to_id(doc)) if doc else None
