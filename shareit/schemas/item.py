from pydantic import BaseModel
from typing import Optional

class Item(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    available: bool
    owner_id: int

class ItemShort(BaseModel):
    id: int
    name: str
