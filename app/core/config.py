from pydantic import field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 1800

    # Logging
    LOG_LEVEL: str = "INFO"

    # --- CORS ---
    # JSON list in the environment, e.g. CORS_ORIGINS='["https://example.com"]'
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",  # React / Next.js
        "http://localhost:5173",  # Vite
    ]

    @field_validator("DATABASE_URL")
    @classmethod
    def require_database_url(cls, v: str) -> str:
        # Padded URLs are accepted as-is, blank ones are not
        if not v or not v.strip():
            raise ValueError("DATABASE_URL is not set")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        extra = "ignore" # Ignore unrelated variables in .env

settings = Settings()
