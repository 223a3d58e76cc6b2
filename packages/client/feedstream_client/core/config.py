from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FEEDSTREAM_", extra="ignore")

    api_base_url: str = "https://api.stream-io-api.com/api/v1.0/"
    # Sent as the `api_key` query parameter; request signing is left to the caller.
    api_key: str | None = None
    timeout_sec: float = 10.0
    user_agent: str = "feedstream-python/0.1.0"
    log_json: bool = False

    # Feed follow defaults (service caps the copy limit at 1000).
    activity_copy_limit: int = 100
    recent_reactions_limit: int | None = None

    @field_validator("api_base_url")
    @classmethod
    def _normalize_base_url(cls, v: str) -> str:
        raw = str(v or "").strip()
        if not raw:
            raise ValueError("FEEDSTREAM_API_BASE_URL must not be empty")
        return raw if raw.endswith("/") else f"{raw}/"

    @field_validator("api_key")
    @classmethod
    def _blank_api_key(cls, v: str | None) -> str | None:
        raw = str(v or "").strip()
        return raw or None

    @field_validator("timeout_sec")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if float(v) <= 0:
            raise ValueError(f"FEEDSTREAM_TIMEOUT_SEC must be > 0 (got {v!r})")
        return float(v)
