from fastapi import Header, HTTPException

from .config import get_settings

settings = get_settings()


async def get_current_user_id(
    user_id: int = Header(..., alias=settings.user_id_header),
) -> int:
    """
    La autenticación la resuelve el gateway: aquí solo llega el id
    numérico del usuario ya autenticado en la cabecera X-Sharer-User-Id.
    """
    if user_id <= 0:
        raise HTTPException(status_code=400, detail=f"Invalid {settings.user_id_header}")
    return user_id
