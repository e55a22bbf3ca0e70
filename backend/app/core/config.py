# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

from settings import DatabaseConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="allow")  # allow additional fields from .env

    DATABASE_URL: str = DatabaseConfig.POSTGRES_URL
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Reject malformed startDate/endDate instead of treating them as absent
    STRICT_DATE_PARSING: bool = False

    # Origin label shown for a document is the folder path after this marker
    CUSTOMER_PATH_MARKER: str = "documents to search"
    FILE_LINK_BASE_URL: str = ""

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
