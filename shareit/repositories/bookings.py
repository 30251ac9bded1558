# shareit/repositories/bookings.py
from datetime import datetime
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from ..db import next_id
from ..schemas.booking import Booking, BookingOut, BookingState, BookingStatus
from ..utils import to_id, to_doc

# start descendente; _id desempata para que la paginación sea estable
SORT = {"start": -1, "_id": 1}


def state_filter(state: BookingState, now: datetime) -> Dict[str, Any]:
    """Traduce el estado pedido en un listado a un filtro de Mongo."""
    if state == BookingState.ALL:
        return {}
    if state in (BookingState.WAITING, BookingState.REJECTED):
        return {"status": state.value}
    if state == BookingState.PAST:
        return {"end": {"$lt": now}}
    if state == BookingState.CURRENT:
        return {"start": {"$lte": now}, "end": {"$gte": now}}
    if state == BookingState.FUTURE:
        # "todavía no ha terminado", no "todavía no ha empezado"
        return {"end": {"$gt": now}}
    raise ValueError(f"Estado sin filtro: {state!r}")


def page_pipeline(match: Dict[str, Any], page: int, size: int) -> List[Dict[str, Any]]:
    # el join va antes de paginar: las reservas huérfanas no dejan páginas cortas
    return [
        {"$match": match},
        {"$sort": SORT},
        {"$lookup": {"from": "users", "localField": "booker_id", "foreignField": "_id", "as": "booker"}},
        {"$lookup": {"from": "items", "localField": "item_id", "foreignField": "_id", "as": "item"}},
        {"$unwind": "$booker"},
        {"$unwind": "$item"},
        {"$skip": page * size},
        {"$limit": size},
    ]


def _to_out(doc: dict) -> BookingOut:
    d = to_id(doc)
    d["booker"] = to_id(d["booker"])
    d["item"] = to_id(d["item"])
    return BookingOut(**d)


class BookingStore:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def save(self, booking: Booking) -> Booking:
        doc = booking.model_dump()
        doc["status"] = booking.status.value
        if booking.id is None:
            doc["id"] = await next_id(self.db, "bookings")
            await self.db.bookings.insert_one(to_doc(doc))
        else:
            await self.db.bookings.replace_one({"_id": booking.id}, to_doc(doc), upsert=True)
        return Booking(**doc)

    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        doc = await self.db.bookings.find_one({"_id": booking_id})
        return Booking(**to_id(doc)) if doc else None

    async def update_status(
        self, booking_id: int, expected: BookingStatus, new: BookingStatus
    ) -> Optional[Booking]:
        """
        Cambia el estado solo si sigue siendo `expected`.
        Devuelve None si otra petición lo cambió antes.
        """
        doc = await self.db.bookings.find_one_and_update(
            {"_id": booking_id, "status": expected.value},
            {"$set": {"status": new.value}},
            return_document=ReturnDocument.AFTER,
        )
        return Booking(**to_id(doc)) if doc else None

    async def find_by_booker(
        self, booker_id: int, state: BookingState, now: datetime, page: int, size: int
    ) -> List[BookingOut]:
        return await self._page({"booker_id": booker_id, **state_filter(state, now)}, page, size)

    async def find_by_item_owner(
        self, owner_id: int, state: BookingState, now: datetime, page: int, size: int
    ) -> List[BookingOut]:
        return await self._page({"item_owner_id": owner_id, **state_filter(state, now)}, page, size)

    async def _page(self, match: Dict[str, Any], page: int, size: int) -> List[BookingOut]:
        docs = await self.db.bookings.aggregate(page_pipeline(match, page, size)).to_list(size)
        return [_to_out(d) for d in docs]
