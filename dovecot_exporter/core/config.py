"""Exporter settings.

Values are read from ``DOVECOT_EXPORTER_*`` environment variables (or a
local ``.env`` file) and can be overridden by command-line flags in
``dovecot_exporter.main``.
"""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Runtime configuration for the exporter process.

    Attributes:
        SOCKET_PATH: Path of Dovecot's stats socket.
        SCOPES: Comma separated scopes queried on every scrape, in order.
        GLOBAL_SCOPES: Comma separated scopes answered in the single-row format.
        SOCKET_TIMEOUT: Seconds allowed for each connect, write and read on the socket.
        EXPORT_FILE: Read a captured EXPORT dump from this file instead of the socket.
        LISTEN_HOST: Interface the HTTP listener binds to. Empty means all interfaces.
        LISTEN_PORT: Port of the HTTP listener.
        TELEMETRY_PATH: Path under which metrics are exposed.
        LOG_LEVEL: Root log level name.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOVECOT_EXPORTER_",
        env_file=".env",
        extra="ignore",
    )

    SOCKET_PATH: str = "/var/run/dovecot/stats"
    SCOPES: str = "user"
    GLOBAL_SCOPES: str = "global"
    SOCKET_TIMEOUT: float = 5.0
    EXPORT_FILE: Optional[str] = None

    LISTEN_HOST: str = ""
    LISTEN_PORT: int = 9199
    TELEMETRY_PATH: str = "/metrics"

    LOG_LEVEL: str = "INFO"

    @field_validator("SOCKET_TIMEOUT")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("SOCKET_TIMEOUT must be greater than zero")
        return v

    @field_validator("TELEMETRY_PATH")
    @classmethod
    def _path_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("TELEMETRY_PATH must start with '/'")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _level_known(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @property
    def scope_list(self) -> list[str]:
        """Scopes to query, in configured order."""
        return _split_csv(self.SCOPES)

    @property
    def global_scope_set(self) -> frozenset[str]:
        """Scopes that answer with a single aggregate row."""
        return frozenset(_split_csv(self.GLOBAL_SCOPES))


settings = Settings()
