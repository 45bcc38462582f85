# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from marketplace.shared.logging import logger

_WEAK_SECRET_KEYS = frozenset({"", "dev", "development", "test", "changeme", "secret"})

_GROUP_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


def _parse_flag(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///marketplace.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _GROUP_CONFIG


class RedisConfig(BaseSettings):
    host: str = Field("localhost", alias="REDIS_HOST")
    port: int = Field(6379, ge=1, le=65535, alias="REDIS_PORT")
    password: str | None = Field(None, alias="REDIS_PASSWORD")
    db: int = Field(0, ge=0, alias="REDIS_DB")
    connect_timeout: float = Field(5.0, ge=0.1, alias="REDIS_CONNECT_TIMEOUT")
    connect_retries: int = Field(3, ge=0, alias="REDIS_CONNECT_RETRIES")

    model_config = _GROUP_CONFIG


class SessionConfig(BaseSettings):
    ttl_seconds: int = Field(60 * 60 * 24 * 7, ge=1, alias="SESSION_TTL")
    max_token_attempts: int = Field(5, ge=1, le=100, alias="SESSION_MAX_TOKEN_ATTEMPTS")
    backend: Literal["redis", "memory"] = Field("redis", alias="KV_BACKEND")

    model_config = _GROUP_CONFIG


class ImageAdmissionConfig(BaseSettings):
    max_bytes: int = Field(5 << 20, ge=1, alias="IMAGE_MAX_BYTES")
    sniff_bytes: int = Field(512 << 10, ge=64, alias="IMAGE_SNIFF_BYTES")
    max_width: int = Field(4096, ge=1, alias="IMAGE_MAX_WIDTH")
    max_height: int = Field(4096, ge=1, alias="IMAGE_MAX_HEIGHT")
    timeout: float = Field(5.0, gt=0, alias="IMAGE_TIMEOUT")
    max_redirects: int = Field(3, ge=0, alias="IMAGE_MAX_REDIRECTS")

    model_config = _GROUP_CONFIG


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")
    service_name: str = Field("marketplace-backend", alias="SERVICE_NAME")

    model_config = _GROUP_CONFIG

    @field_validator("metrics_enabled", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # CSRF protection
    enable_csrf: bool = Field(True, alias="ENABLE_CSRF")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _GROUP_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_csrf", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _redis_config_factory() -> RedisConfig:
    return RedisConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _image_config_factory() -> ImageAdmissionConfig:
    return ImageAdmissionConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    redis: RedisConfig = Field(default_factory=_redis_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    images: ImageAdmissionConfig = Field(default_factory=_image_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @model_validator(mode="after")
    def _check_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in _WEAK_SECRET_KEYS or len(self.secret_key) < 32:
            # CSRF signatures are only as strong as this key
            raise ValueError(
                "SECRET_KEY must be a random value of at least 32 characters in production"
            )

        for weakness in self.production_weaknesses():
            logger.warning(f"config: production running with {weakness}")
        return self

    def production_weaknesses(self) -> list[str]:
        checks = (
            (not self.security.enable_csrf, "CSRF protection disabled (ENABLE_CSRF)"),
            (not self.security.cookie_secure, "cookies without the Secure flag (COOKIE_SECURE)"),
            ("*" in self.security.allowed_origins, "wildcard CORS origins (ALLOWED_ORIGINS)"),
            (self.session.backend == "memory", "process-local sessions (KV_BACKEND=memory)"),
        )
        return [message for failed, message in checks if failed]

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ImageAdmissionConfig",
    "ObservabilityConfig",
    "RedisConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
