from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from tpn.models.configs import DEFAULT_RAW_BASE_URL

load_dotenv(override=False)


DEFAULT_POTENTIAL_PATHS = (
    "THIRD-PARTY-NOTICES.TXT",
    "THIRD-PARTY-NOTICES.txt",
    "THIRD-PARTY-NOTICES.md",
)


class Settings(BaseModel):
    """Environment-driven defaults for notices regeneration."""

    raw_base_url: str = Field(default_factory=lambda: os.getenv("TPN_RAW_BASE_URL", DEFAULT_RAW_BASE_URL))
    http_timeout: float = Field(default_factory=lambda: float(os.getenv("TPN_HTTP_TIMEOUT", "30")))
    log_level: str = Field(default_factory=lambda: os.getenv("TPN_LOG_LEVEL", "INFO"))
    default_paths: List[str] = Field(
        default_factory=lambda: os.getenv("TPN_DEFAULT_PATHS") or list(DEFAULT_POTENTIAL_PATHS)
    )

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @field_validator("raw_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @field_validator("default_paths", mode="before")
    @classmethod
    def _split_paths(cls, value: object) -> List[str]:
        if value is None:
            return list(DEFAULT_POTENTIAL_PATHS)
        if isinstance(value, str):
            paths = [path.strip() for path in value.split(",") if path.strip()]
            return paths or list(DEFAULT_POTENTIAL_PATHS)
        return list(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()


__all__ = ["DEFAULT_POTENTIAL_PATHS", "Settings", "get_settings"]
