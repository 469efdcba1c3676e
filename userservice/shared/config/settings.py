# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field(alias="DATABASE_URL", min_length=1)
    max_open_conns: int = Field(16, ge=1, alias="DATABASE_MAX_OPEN_CONNS")
    max_idle_conns: int = Field(8, ge=0, alias="DATABASE_MAX_IDLE_CONNS")
    conn_max_lifetime: float = Field(300.0, ge=1.0, alias="DATABASE_CONN_MAX_LIFETIME")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @model_validator(mode="after")
    def _validate_pool(self) -> "DatabaseConfig":
        if self.max_idle_conns > self.max_open_conns:
            raise ValueError("DATABASE_MAX_IDLE_CONNS must not exceed DATABASE_MAX_OPEN_CONNS")
        return self

    @property
    def pool_size(self) -> int:
        return self.max_idle_conns

    @property
    def max_overflow(self) -> int:
        return self.max_open_conns - self.max_idle_conns


class PubSubConfig(BaseSettings):
    enabled: bool = Field(False, alias="ENABLE_GCP_SUBSCRIPTION")
    topic: str | None = Field(None, alias="GCP_USER_TOPIC_URL")
    endpoint: str = Field("https://pubsub.googleapis.com/v1", alias="PUBSUB_ENDPOINT")
    auth_token: str | None = Field(None, alias="PUBSUB_AUTH_TOKEN")
    timeout: float = Field(5.0, ge=0.1, alias="PUBSUB_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @field_validator("enabled", mode="before")
    @classmethod
    def _parse_enabled(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _require_topic(self) -> "PubSubConfig":
        if self.enabled and not (self.topic and self.topic.strip()):
            raise ValueError("'GCP_USER_TOPIC_URL' must be provided when pub/sub is enabled")
        return self


class ServerConfig(BaseSettings):
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8080, ge=1, le=65535, alias="PORT")
    request_timeout: float = Field(10.0, ge=0.1, alias="REQUEST_TIMEOUT")
    api_prefix: str = Field("/api/public/v1", alias="API_PREFIX")
    allowed_origins: str = Field("*", alias="ALLOWED_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @field_validator("api_prefix", mode="after")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @property
    def origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _pubsub_config_factory() -> PubSubConfig:
    return PubSubConfig()  # type: ignore[call-arg]


def _server_config_factory() -> ServerConfig:
    return ServerConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    pubsub: PubSubConfig = Field(default_factory=_pubsub_config_factory)
    server: ServerConfig = Field(default_factory=_server_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "PubSubConfig", "ServerConfig", "load_config"]
