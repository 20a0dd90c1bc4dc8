from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="IMPACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    store_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    store_timeout_s: float = 20.0

    cors_allow_origins: list[str] = ["*"]
    cors_allow_headers: list[str] = [
        "authorization", "x-client-info", "apikey", "content-type"
    ]
    cors_allow_methods: list[str] = ["*"]

    log_level: str = "info"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    return Settings()
