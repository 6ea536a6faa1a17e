"""Application Configuration"""

from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Seiva School Admin"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Persistence: "local" (JSON files) or "database" (relational backend)
    DATA_BACKEND: str = "local"
    LOCAL_DATA_DIR: str = "./data"

    # Database (only required when DATA_BACKEND=database)
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    # Academic calendar. Tuition is billed per period, in this order.
    ACADEMIC_PERIODS: str = (
        "February,March,April,May,June,July,August,September,October,November"
    )
    # Name of the period considered "current"; derived from today's date when unset
    CURRENT_PERIOD: Optional[str] = None
    DEFAULT_CURRENCY: str = "MZN"

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("ALLOWED_ORIGINS")
    @classmethod
    def parse_origins(cls, v: str) -> List[str]:
        """Parse comma-separated origins into a list"""
        return [origin.strip() for origin in v.split(",")]

    @field_validator("ACADEMIC_PERIODS")
    @classmethod
    def parse_periods(cls, v: str) -> List[str]:
        """Parse comma-separated period names into an ordered list"""
        return [period.strip() for period in v.split(",") if period.strip()]

    @field_validator("DATA_BACKEND")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT.lower() == "production"


# Global settings instance
settings = Settings()
