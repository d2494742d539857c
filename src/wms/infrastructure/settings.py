"""Runtime configuration, read from the environment or a ``.env`` file."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Local JSON data files and the client session file live here.
    DATA_DIR: Path = Field(default=Path.home() / ".wms")

    # REST API used by the ``auth`` commands.
    API_URL: str = "http://localhost:8080/api"
    HTTP_TIMEOUT: float = Field(default=10.0, gt=0)

    ORDER_EXPIRY_MINUTES: int = Field(default=60, gt=0)
    TOKEN_REFRESH_LEAD_SECONDS: int = Field(default=300, ge=0)

    LOG_LEVEL: str = "INFO"
    # Defaults to DATA_DIR/logs/wms.log when unset.
    LOG_FILE: Path | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WMS_",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def order_expiry(self) -> timedelta:
        return timedelta(minutes=self.ORDER_EXPIRY_MINUTES)

    @property
    def log_path(self) -> Path:
        if self.LOG_FILE is not None:
            return Path(self.LOG_FILE).expanduser()
        return Path(self.DATA_DIR).expanduser() / "logs" / "wms.log"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
