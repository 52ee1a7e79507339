"""Client configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    base_url: str = "http://localhost:8080"
    prefix: str = "/api/v1"
    timeout: float = Field(default=30.0, gt=0)


class StorageSettings(BaseModel):
    backend: Literal["sqlite", "memory"] = "sqlite"
    url: str = "sqlite+aiosqlite:///./securewallet_client.db"
    echo: bool = False


class RenewalSettings(BaseModel):
    single_flight: bool = True
    proactive: bool = False
    leeway_seconds: int = Field(default=30, ge=0)


class LedgerSettings(BaseModel):
    refresh_page_size: int = Field(default=20, gt=0)


class Settings(BaseSettings):
    """Top-level client settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="SECUREWALLET_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    debug: bool = False
    log_level: str = "INFO"

    api: ApiSettings = ApiSettings()
    storage: StorageSettings = StorageSettings()
    renewal: RenewalSettings = RenewalSettings()
    ledger: LedgerSettings = LedgerSettings()

    @property
    def api_base_url(self) -> str:
        return self.api.base_url.rstrip("/") + self.api.prefix

    @property
    def database_url(self) -> str:
        return self.storage.url

    @property
    def refresh_page_size(self) -> int:
        return self.ledger.refresh_page_size


@lru_cache()
def get_settings() -> Settings:
    return Settings()
