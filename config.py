# Di dalam file: config.py

import json
from functools import lru_cache
from typing import Any, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemas import Madhab


def _parse_string_list(value: Any) -> List[str]:
    """Terima list, JSON ('["a","b"]') atau teks dipisah koma."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if str(item).strip()]
    text = str(value).strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(item).strip() for item in parsed if str(item).strip()]
    return [part.strip() for part in text.split(",") if part.strip()]


class Settings(BaseSettings):
    app_title: str = "Fara'id Calculator"
    # Any: supaya parser env tidak memaksa JSON untuk list
    cors_origins: Any = ["http://localhost", "http://localhost:3000"]
    default_madhab: Madhab = Madhab.SHAFII
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> List[str]:
        return _parse_string_list(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FARAID_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
