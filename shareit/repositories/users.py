from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..schemas.user import User
from ..utils import to_id


class UserDirectory:
    """Acceso de solo lectura a la colección `users`."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def find_by_id(self, user_id: int) -> Optional[User]:
        doc = await self.db.users.find_one({"_id": user_id})
        return User(**to_id(doc)) if doc else None
