from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_ENV = "local"
ENV_FILE_MAP = {
    "local": ".env",
    "test": ".env.test",
    "prod": ".env.prod",
}
TLS_ENVS = {"prod", "production"}

app_env = os.getenv("APP_ENV", DEFAULT_ENV).lower()
raw_env_file = os.getenv("ENV_FILE", "").strip()
if raw_env_file:
    env_path = Path(raw_env_file)
    if not env_path.is_absolute():
        env_path = BASE_DIR / env_path
else:
    env_path = BASE_DIR / ENV_FILE_MAP.get(app_env, ".env")

if not env_path.exists():
    env_path = BASE_DIR / ".env"


class Settings(BaseSettings):
    APP_ENV: str = app_env
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_DATABASE: str = "stats"
    DB_USER: str = "stats"
    DB_PASSWORD: str = ""
    DATABASE_URL: str = ""
    DB_SSL: Optional[bool] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    API_KEY: str
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(env_path),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def use_tls(self) -> bool:
        if self.DB_SSL is not None:
            return self.DB_SSL
        return self.APP_ENV.lower() in TLS_ENVS

    @property
    def database_url(self) -> str | URL:
        if self.DATABASE_URL.strip():
            return self.DATABASE_URL.strip()
        return URL.create(
            "postgresql+psycopg",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_DATABASE,
        )

    @property
    def connect_args(self) -> dict:
        # sslmode=require encrypts without verifying the server certificate
        if self.use_tls:
            return {"sslmode": "require"}
        return {}


@lru_cache
def get_settings() -> Settings:
    return Settings()
