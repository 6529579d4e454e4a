from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import ClassVar

class ClientSettings(BaseSettings):
    API_URL: str = "http://localhost:8888"
    API_PATH: str = "/api/authors"
    # seconds a success/error notice stays up
    NOTICE_SECONDS: float = 3.0

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="GALLERY_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

@lru_cache()
def get_client_settings() -> ClientSettings:
    return ClientSettings()
