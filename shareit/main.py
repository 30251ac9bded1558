from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .config import get_settings
from .exceptions import ShareItError, NotFoundError
from .routers import bookings
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from .middleware.rate_limit import rate_limit_key
import logging

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()

# Configurar rate limiting
limiter = Limiter(key_func=rate_limit_key)

app = FastAPI(title=settings.app_name)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

@app.exception_handler(ShareItError)
async def shareit_error_handler(request: Request, exc: ShareItError):
    level = logging.INFO if isinstance(exc, NotFoundError) else logging.WARNING
    logger.log(level, "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

# Configuración de CORS según entorno
if settings.env == "dev":
    cors_origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    cors_regex = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"
    cors_headers = ["Content-Type", "Accept", "Origin", settings.user_id_header]
else:
    frontend_url = settings.frontend_base_url
    cors_origins = [frontend_url] if frontend_url else []
    cors_regex = None
    cors_headers = ["Content-Type", "Accept", settings.user_id_header]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=cors_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=cors_headers,
    expose_headers=["Content-Type"],
)

@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.env}

# Routers
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])

# Endpoint de desarrollo (solo en dev)
if settings.env == "dev":
    from .routers import dev
    app.include_router(dev.router, prefix="/dev", tags=["dev"])
