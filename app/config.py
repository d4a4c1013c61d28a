from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://property_user:property_password@db:5432/property_research"
    DATABASE_ECHO: bool = False
    # Create missing tables on startup (alembic handles managed deployments)
    AUTO_CREATE_TABLES: bool = True
    REDIS_URL: str = "redis://localhost:6379/0"
    # Nominatim geocoding (OpenStreetMap)
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    NOMINATIM_USER_AGENT: str = "property-research-service/0.1"
    NOMINATIM_FALLBACK_LANGUAGE: str = "en"
    NOMINATIM_TIMEOUT: float = 10.0
    GEOCODE_CACHE_TTL: int = 86400
    GEOCODE_RATE_LIMIT_TIMES: int = 30
    GEOCODE_RATE_LIMIT_SECONDS: int = 60
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
