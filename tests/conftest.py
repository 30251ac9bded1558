"""
Configuración de pytest para tests

Los colaboradores (usuarios, objetos, reservas) se sustituyen por dobles
en memoria con la misma interfaz que los repositorios de Mongo.
"""
import pytest
from datetime import datetime, timedelta
from httpx import AsyncClient, ASGITransport

from shareit.schemas.booking import Booking, BookingState, BookingStatus
from shareit.schemas.item import Item
from shareit.schemas.user import User
from shareit.services.booking_service import BookingService, to_out

NOW = datetime(2024, 6, 1, 12, 0)


class InMemoryUsers:
    def __init__(self):
        self.data: dict[int, User] = {}

    def add(self, user_id: int, name: str) -> User:
        self.data[user_id] = User(id=user_id, name=name, email=f"{name.lower()}@example.com")
        return self.data[user_id]

    async def find_by_id(self, user_id):
        return self.data.get(user_id)


class InMemoryItems:
    def __init__(self):
        self.data: dict[int, Item] = {}

    def add(self, item_id: int, owner_id: int, name: str, available: bool = True) -> Item:
        self.data[item_id] = Item(id=item_id, owner_id=owner_id, name=name, available=available)
        return self.data[item_id]

    async def find_by_id(self, item_id):
        return self.data.get(item_id)


def _matches(b: Booking, state: BookingState, now: datetime) -> bool:
    if state == BookingState.ALL:
        return True
    if state in (BookingState.WAITING, BookingState.REJECTED):
        return b.status.value == state.value
    if state == BookingState.PAST:
        return b.end < now
    if state == BookingState.CURRENT:
        return b.start <= now <= b.end
    return b.end > now


class InMemoryBookings:
    def __init__(self, users: InMemoryUsers, items: InMemoryItems):
        self.users = users
        self.items = items
        self.data: dict[int, Booking] = {}
        self._seq = 0

    async def save(self, booking):
        if booking.id is None:
            self._seq += 1
            booking = booking.model_copy(update={"id": self._seq})
        self.data[booking.id] = booking.model_copy()
        return booking

    async def find_by_id(self, booking_id):
        b = self.data.get(booking_id)
        return b.model_copy() if b else None

    async def update_status(self, booking_id, expected, new):
        b = self.data.get(booking_id)
        if b is None or b.status != expected:
            return None
        self.data[booking_id] = b.model_copy(update={"status": new})
        return self.data[booking_id].model_copy()

    async def find_by_booker(self, booker_id, state, now, page, size):
        return self._page(lambda b: b.booker_id == booker_id, state, now, page, size)

    async def find_by_item_owner(self, owner_id, state, now, page, size):
        return self._page(lambda b: b.item_owner_id == owner_id, state, now, page, size)

    def _page(self, pred, state, now, page, size):
        rows = sorted(self.data.values(), key=lambda b: b.id)
        rows = sorted(rows, key=lambda b: b.start, reverse=True)
        rows = [b for b in rows if pred(b) and _matches(b, state, now)]
        # como el $lookup de Mongo: sin usuario u objeto la reserva no aparece
        rows = [b for b in rows if b.booker_id in self.users.data and b.item_id in self.items.data]
        rows = rows[page * size:page * size + size]
        return [to_out(b, self.users.data[b.booker_id], self.items.data[b.item_id]) for b in rows]

    def add(self, booker_id, item_id, start, end, status=BookingStatus.WAITING) -> Booking:
        self._seq += 1
        item = self.items.data[item_id]
        b = Booking(
            id=self._seq, booker_id=booker_id, item_id=item_id, item_owner_id=item.owner_id,
            start=start, end=end, status=status,
        )
        self.data[b.id] = b
        return b


@pytest.fixture
def users():
    directory = InMemoryUsers()
    directory.add(1, "Owner")
    directory.add(2, "Booker")
    directory.add(3, "Stranger")
    return directory

@pytest.fixture
def items(users):
    catalog = InMemoryItems()
    catalog.add(10, owner_id=1, name="Drill")
    catalog.add(11, owner_id=1, name="Ladder", available=False)
    catalog.add(20, owner_id=2, name="Bike")
    return catalog

@pytest.fixture
def store(users, items):
    return InMemoryBookings(users, items)

@pytest.fixture
def service(users, items, store):
    return BookingService(users, items, store, clock=lambda: NOW)

@pytest.fixture
def timeline(store):
    """Reservas del usuario 2 sobre el taladro (owner 1) en distintos momentos"""
    return {
        "past": store.add(2, 10, NOW - timedelta(days=10), NOW - timedelta(days=8), BookingStatus.APPROVED),
        "current": store.add(2, 10, NOW - timedelta(days=1), NOW + timedelta(days=1), BookingStatus.APPROVED),
        "future": store.add(2, 10, NOW + timedelta(days=5), NOW + timedelta(days=6)),
        "rejected": store.add(2, 10, NOW + timedelta(days=7), NOW + timedelta(days=8), BookingStatus.REJECTED),
    }

@pytest.fixture
async def client(service):
    """Cliente HTTP contra la app con el servicio en memoria"""
    from shareit.main import app
    from shareit.routers.bookings import get_booking_service

    app.state.limiter = None
    app.dependency_overrides[get_booking_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
