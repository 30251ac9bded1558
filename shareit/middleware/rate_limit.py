"""
Rate limiting por endpoint usando slowapi
"""
from fastapi import Request, HTTPException
from limits import parse
from slowapi.util import get_remote_address

from ..config import get_settings

settings = get_settings()

def rate_limit_key(request: Request) -> str:
    """Clave del contador: el usuario si viene identificado, si no la IP."""
    user_id = request.headers.get(settings.user_id_header)
    if user_id:
        return f"user:{user_id}"
    return get_remote_address(request)

def apply_rate_limit(request: Request, limit: str, scope: str = "default"):
    """
    Aplica rate limiting a un endpoint específico.
    Uso: apply_rate_limit(request, "5/minute", "bookings")

    Si el limiter no está configurado (por ejemplo, en tests), la función no hace nada.
    """
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        return

    if not limiter.limiter.hit(parse(limit), scope, rate_limit_key(request)):
        raise HTTPException(
            status_code=429,
            detail=f"Too many requests. Limit: {limit}",
        )
