from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ASCENDING_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    frontend_dir: Path | None = None

    # Database
    db_url: str = "sqlite+aiosqlite:///./ascending.db"

    # Auth
    jwt_secret: str = ""  # required; no fallback
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24
    bcrypt_rounds: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
