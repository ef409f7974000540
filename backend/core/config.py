from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Validation engine
    VALIDATION_MAX_ERRORS: int = 50
    VALIDATION_ABORT_EARLY: bool = False

    # Profile / avatar checks
    AVATAR_MAX_BYTES: int = 5 * 1024 * 1024
    AVATAR_ALLOWED_MIME_TYPES: list[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]
    PROFILE_BIO_MAX_LENGTH: int = 500

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
