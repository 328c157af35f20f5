"""recordstore configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from recordstore import __version__
from recordstore.core.types import StoreKind
from recordstore.exceptions import ConfigError

_ENV_FIELDS = {
    "app_name": "APP_NAME",
    "app_description": "APP_DESCRIPTION",
    "app_version": "APP_VERSION",
    "values_service_type": "VALUES_SERVICE_TYPE",
    "users_file": "APP_USERS_FILE",
    "host": "RECORDSTORE_HOST",
    "port": "RECORDSTORE_PORT",
    "log_level": "RECORDSTORE_LOG_LEVEL",
}


class Settings(BaseModel):
    """Process configuration for the record service."""

    app_name: str = "recordstore"
    app_description: str = "A minimal key-value record service"
    app_version: str = __version__
    values_service_type: str = "default"
    users_file: Path = Path("config") / "appusers.json"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"

    @property
    def store_kind(self) -> StoreKind:
        return StoreKind.from_setting(self.values_service_type)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables, ignoring empty ones."""
        env = os.environ if environ is None else environ
        values = {field: env[var] for field, var in _ENV_FIELDS.items() if env.get(var)}
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc
