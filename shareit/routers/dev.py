# shareit/routers/dev.py
# Endpoint de desarrollo para crear datos de prueba
from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from ..db import get_db, next_id

router = APIRouter()

USERS = [
    {"name": "María García", "email": "maria@test.com"},
    {"name": "Juan Pérez", "email": "juan@test.com"},
]

# índice del propietario en USERS
ITEMS = [
    {"owner": 0, "name": "Taladro", "description": "Taladro percutor 800W", "available": True},
    {"owner": 0, "name": "Tienda de campaña", "description": "Para 4 personas", "available": True},
    {"owner": 1, "name": "Bicicleta", "description": "De montaña, talla M", "available": True},
    {"owner": 1, "name": "Escalera", "description": "En reparación", "available": False},
]

@router.post("/seed-data")
async def seed_data(db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Crea usuarios y objetos de prueba para poder reservar.
    Solo para desarrollo.
    """
    user_ids = []
    for user in USERS:
        existing = await db.users.find_one({"email": user["email"]})
        if existing:
            user_ids.append(existing["_id"])
            continue
        uid = await next_id(db, "users")
        await db.users.insert_one({"_id": uid, **user})
        user_ids.append(uid)

    item_ids = []
    for item in ITEMS:
        owner_id = user_ids[item["owner"]]
        existing = await db.items.find_one({"owner_id": owner_id, "name": item["name"]})
        if existing:
            item_ids.append(existing["_id"])
            continue
        iid = await next_id(db, "items")
        await db.items.insert_one({
            "_id": iid,
            "owner_id": owner_id,
            "name": item["name"],
            "description": item["description"],
            "available": item["available"],
        })
        item_ids.append(iid)

    return {
        "message": "Datos de prueba creados",
        "user_ids": user_ids,
        "item_ids": item_ids,
    }
