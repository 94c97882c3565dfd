
from __future__ import annotations
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ULIDKIT_", extra="ignore")

    # Monotonic generator
    # "strict": exchange and payload update under one lock
    # "timed": lock-free exchange, bounded lock wait, unlocked fallback on timeout
    MONOTONIC_LOCK_MODE: Literal["strict", "timed"] = "strict"
    MONOTONIC_LOCK_TIMEOUT_MS: float = 1.0

    # Observability
    LOG_JSON: bool = False
    LOG_LEVEL: str = "INFO"

settings = Settings()
