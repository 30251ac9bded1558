from pydantic import BaseModel
from typing import Optional

# Los usuarios los gestiona el servicio de cuentas; aquí solo se leen.
class User(BaseModel):
    id: int
    name: str
    email: Optional[str] = None

class UserShort(BaseModel):
    id: int
    name: str
