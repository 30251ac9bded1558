from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from .config import get_settings

_settings = get_settings()
_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

async def get_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is None:
        _client = AsyncIOMotorClient(_settings.mongodb_uri)
        _db = _client[_settings.db_name]
        # Índices para las consultas paginadas de reservas
        await _db.users.create_index("email", unique=True, sparse=True)
        await _db.items.create_index([("owner_id", 1)])
        await _db.bookings.create_index([("booker_id", 1), ("start", -1)])
        await _db.bookings.create_index([("item_owner_id", 1), ("start", -1)])
        await _db.bookings.create_index([("item_id", 1)])
    return _db


async def next_id(db: AsyncIOMotorDatabase, sequence: str) -> int:
    """
    Devuelve el siguiente identificador entero de la secuencia `sequence`.
    Los contadores viven en la colección `counters`.
    """
    doc = await db.counters.find_one_and_update(
        {"_id": sequence},
        {"$inc": {"value": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(doc["value"])
