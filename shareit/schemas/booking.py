from pydantic import BaseModel, ConfigDict, Field, model_validator
from enum import Enum
from datetime import datetime

from .user import UserShort
from .item import ItemShort

class BookingStatus(str, Enum):
    WAITING  = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

# Filtro de los listados; PAST/CURRENT/FUTURE se calculan contra "ahora"
class BookingState(str, Enum):
    ALL      = "ALL"
    WAITING  = "WAITING"
    REJECTED = "REJECTED"
    PAST     = "PAST"
    CURRENT  = "CURRENT"
    FUTURE   = "FUTURE"

class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(..., alias="itemId")
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _check_interval(self):
        if self.end <= self.start:
            raise ValueError("end debe ser posterior a start")
        return self

class Booking(BaseModel):
    """Documento persistido en la colección `bookings`."""
    id: int | None = None
    booker_id: int
    item_id: int
    item_owner_id: int
    start: datetime
    end: datetime
    status: BookingStatus = BookingStatus.WAITING

class BookingOut(BaseModel):
    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    booker: UserShort
    item: ItemShort
