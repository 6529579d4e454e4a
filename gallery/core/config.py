from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import ClassVar

class Settings(BaseSettings):
    PROJECT_NAME: str = "Authors Gallery API"
    API_PATH: str = "/api/authors"

    # Required at request time, not at import time
    DATABASE_URL: str | None = None

    # Shared secret of the identity provider; unset disables the session check
    IDENTITY_JWT_SECRET: str | None = None
    IDENTITY_JWT_ALGORITHMS: list[str] = ["HS256"]

    CORS_ORIGINS: list[str] = ["http://localhost:8888", "http://127.0.0.1:8888"]
    LOG_LEVEL: str = "INFO"

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow",
    )

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_driver(cls, v: str | None) -> str | None:
        # Hosted Postgres providers hand out libpq style URLs
        if not v:
            return None
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+psycopg://" + v[len(prefix):]
        return v

@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
