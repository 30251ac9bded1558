# shareit/routers/bookings.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import List
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..config import get_settings
from ..db import get_db
from ..middleware.rate_limit import apply_rate_limit
from ..repositories.bookings import BookingStore
from ..repositories.items import ItemCatalog
from ..repositories.users import UserDirectory
from ..schemas.booking import BookingCreate, BookingOut
from ..security import get_current_user_id
from ..services.booking_service import BookingService

router = APIRouter()
settings = get_settings()


async def get_booking_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> BookingService:
    return BookingService(UserDirectory(db), ItemCatalog(db), BookingStore(db))


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: Request,
    payload: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    apply_rate_limit(request, settings.booking_rate_limit, "bookings:create")
    return await service.create_booking(user_id, payload.item_id, payload.start, payload.end)

# /owner va antes que /{booking_id}
@router.get("/owner", response_model=List[BookingOut])
async def list_owner_bookings(
    state: str = "ALL",
    offset: int = Query(0, alias="from"),
    size: int = Query(settings.default_page_size),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    return await service.list_by_owner(user_id, state, offset, size)

@router.get("", response_model=List[BookingOut])
async def list_my_bookings(
    state: str = "ALL",
    offset: int = Query(0, alias="from"),
    size: int = Query(settings.default_page_size),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    return await service.list_by_requester(user_id, state, offset, size)

@router.get("/{booking_id}", response_model=BookingOut)
async def get_booking(
    booking_id: int,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    return await service.get_booking(user_id, booking_id)

@router.patch("/{booking_id}", response_model=BookingOut)
async def decide_booking(
    booking_id: int,
    approved: bool = Query(...),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    return await service.decide_booking(user_id, booking_id, approved)
