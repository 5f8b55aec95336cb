# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from functools import lru_cache
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

# Fallback signing key used when SECRET_KEY is not provided (development only)
DEFAULT_SECRET_KEY = "dev-secret"


class Settings(BaseSettings):
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    # 7 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    DATABASE_URL: str = "sqlite:///./reviews.db"

    # bcrypt cost factor, 12 rounds is roughly 100-250 ms per hash
    BCRYPT_ROUNDS: int = 12

    # Insert ownerless demo reviews when the table is empty
    SEED_DEMO_DATA: bool = True

    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def uses_default_secret(self) -> bool:
        return not self.SECRET_KEY or self.SECRET_KEY == DEFAULT_SECRET_KEY


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
