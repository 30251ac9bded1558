from pydantic import BaseModel
import os
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "ShareIt")
    env: str = os.getenv("APP_ENV", "dev")
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "shareit")
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")
    user_id_header: str = os.getenv("USER_ID_HEADER", "X-Sharer-User-Id")
    booking_rate_limit: str = os.getenv("BOOKING_RATE_LIMIT", "15/minute")
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
