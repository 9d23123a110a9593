from typing import List, Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ENVIRONMENT: Literal["development", "production"] = "development"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # "memory" keeps articles in process, for demos and tests
    STORE_BACKEND: Literal["postgres", "memory"] = "postgres"

    # Listing
    NEWS_PER_PAGE: int = 10
    NEWS_MAX_PER_PAGE: int = 100
    FEATURED_NEWS_LIMIT: int = 5

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:8000",
        "http://localhost:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_LEVEL_SQL: str = "WARNING"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> str:
        if isinstance(v, str):
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            elif v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

settings = Settings()
