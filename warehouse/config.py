from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Warehouse Management System"
    LOG_LEVEL: str = "INFO"
    CLI_LOG_LEVEL: str = "WARNING"

    # Persistence
    PRODUCTS_FILE: str = "products.txt"
    AUTOSAVE: bool = True

    # Login gate
    USERS_FILE: str = "user.txt"
    SUPERADMIN_USERNAME: str = "superadmin"
    SUPERADMIN_PASSWORD: str = "admin123"  # Override in .env

    # JWT Authentication (HTTP driver)
    SECRET_KEY: str = "change-this-in-production-secret-key-12345"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Weather advisory
    WEATHER_API_KEY: Optional[str] = None
    WEATHER_API_URL: str = "https://api.openweathermap.org/data/2.5/weather"
    WEATHER_CITY: str = "West Lafayette"
    WEATHER_UNITS: str = "imperial"
    WEATHER_TIMEOUT_SECONDS: float = 5.0
    HOT_THRESHOLD: float = 100.0
    COLD_THRESHOLD: float = 40.0

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]  # Restrict in production

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
