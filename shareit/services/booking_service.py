"""
Ciclo de vida de las reservas: creación, decisión del propietario,
consulta individual y listados paginados por estado.

Las comprobaciones de permisos fallan con NotFoundError (y no con un 403)
para no revelar si la reserva existe. No se comprueba solapamiento entre
reservas del mismo objeto: el propietario decide al aprobar.
"""
import logging
from datetime import datetime
from typing import Callable, List, Tuple, Union

from ..exceptions import BookingValidationError, NotFoundError
from ..repositories.bookings import BookingStore
from ..repositories.items import ItemCatalog
from ..repositories.users import UserDirectory
from ..schemas.booking import Booking, BookingOut, BookingState, BookingStatus
from ..schemas.item import Item, ItemShort
from ..schemas.user import User, UserShort
from ..utils import as_naive_utc

logger = logging.getLogger(__name__)

UNKNOWN_STATE = "Unknown state: UNSUPPORTED_STATUS"
NO_ACCESS = "User's booking information not found"
BOOKER_GONE = "Booker doesn't exist"


def parse_state(raw: Union[str, BookingState]) -> BookingState:
    if isinstance(raw, BookingState):
        return raw
    try:
        return BookingState(str(raw).strip().upper())
    except ValueError:
        raise BookingValidationError(UNKNOWN_STATE)


def page_of(offset: int, limit: int) -> Tuple[int, int]:
    """(índice de página, tamaño) a partir de from/size."""
    if limit <= 0:
        raise BookingValidationError("size must be greater than 0")
    if offset < 0:
        raise BookingValidationError("from must not be negative")
    return offset // limit, limit


def next_status(current: BookingStatus, approved: bool) -> BookingStatus:
    # Solo se rechaza repetir el mismo estado; APPROVED <-> REJECTED se permite
    if approved and current != BookingStatus.APPROVED:
        return BookingStatus.APPROVED
    if not approved and current != BookingStatus.REJECTED:
        return BookingStatus.REJECTED
    raise BookingValidationError("Status cannot be changed")


def to_out(booking: Booking, booker: User, item: Item) -> BookingOut:
    return BookingOut(
        id=booking.id,
        start=booking.start,
        end=booking.end,
        status=booking.status,
        booker=UserShort(id=booker.id, name=booker.name),
        item=ItemShort(id=item.id, name=item.name),
    )


class BookingService:
    def __init__(
        self,
        users: UserDirectory,
        items: ItemCatalog,
        bookings: BookingStore,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.users = users
        self.items = items
        self.bookings = bookings
        self.clock = clock

    # ---------- Búsquedas ----------

    async def _user(self, user_id: int, message: str = "User doesn't exist") -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(message)
        return user

    async def _item(self, item_id: int, message: str = "Item doesn't exist") -> Item:
        item = await self.items.find_by_id(item_id)
        if item is None:
            raise NotFoundError(message)
        return item

    async def _booking(self, booking_id: int) -> Booking:
        booking = await self.bookings.find_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    # ---------- Operaciones ----------

    async def create_booking(
        self, requester_id: int, item_id: int, start: datetime, end: datetime
    ) -> BookingOut:
        user = await self._user(requester_id)
        item = await self._item(item_id)
        # la propiedad se comprueba antes que la disponibilidad
        if item.owner_id == user.id:
            raise NotFoundError("Item has another owner")
        if not item.available:
            raise BookingValidationError("Item is not available for booking")

        booking = await self.bookings.save(Booking(
            booker_id=user.id,
            item_id=item.id,
            item_owner_id=item.owner_id,
            start=as_naive_utc(start),
            end=as_naive_utc(end),
            status=BookingStatus.WAITING,
        ))
        logger.info("Booking %s created by user %s for item %s", booking.id, user.id, item.id)
        return to_out(booking, user, item)

    async def decide_booking(self, decider_id: int, booking_id: int, approved: bool) -> BookingOut:
        booking = await self._booking(booking_id)
        user = await self._user(decider_id, "User not found")
        item = await self._item(booking.item_id, "Item not found")
        if item.owner_id != user.id:
            raise NotFoundError(NO_ACCESS)
        booker = await self._user(booking.booker_id, BOOKER_GONE)

        new = next_status(booking.status, approved)
        updated = await self.bookings.update_status(booking.id, booking.status, new)
        if updated is None:
            # otra petición cambió el estado entre la lectura y la escritura
            raise BookingValidationError("Status cannot be changed")

        logger.info("Booking %s %s -> %s by owner %s", booking.id, booking.status.value, new.value, user.id)
        return to_out(updated, booker, item)

    async def get_booking(self, requester_id: int, booking_id: int) -> BookingOut:
        booking = await self._booking(booking_id)
        item = await self._item(booking.item_id)
        if requester_id not in (booking.booker_id, item.owner_id):
            raise NotFoundError(NO_ACCESS)
        booker = await self._user(booking.booker_id, BOOKER_GONE)
        return to_out(booking, booker, item)

    async def list_by_requester(
        self, requester_id: int, state: Union[str, BookingState] = BookingState.ALL,
        offset: int = 0, limit: int = 10,
    ) -> List[BookingOut]:
        await self._user(requester_id)
        parsed = parse_state(state)
        page, size = page_of(offset, limit)
        return await self.bookings.find_by_booker(requester_id, parsed, self.clock(), page, size)

    async def list_by_owner(
        self, requester_id: int, state: Union[str, BookingState] = BookingState.ALL,
        offset: int = 0, limit: int = 10,
    ) -> List[BookingOut]:
        await self._user(requester_id)
        parsed = parse_state(state)
        page, size = page_of(offset, limit)
        return await self.bookings.find_by_item_owner(requester_id, parsed, self.clock(), page, size)
