# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from datetime import timedelta
from functools import lru_cache
from ipaddress import IPv4Network, IPv6Network, ip_network
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "", "your-secret-key-change-in-production")
DEFAULT_ADMIN_PASSWORD = "admin123"


def _section_config() -> SettingsConfigDict:
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
        extra="ignore",
    )


class StorageConfig(BaseSettings):
    data_dir: Path = Field(Path("data"), alias="DATA_DIR")
    content_dir: Path = Field(Path("src/content/blog"), alias="CONTENT_DIR")

    model_config = _section_config()

    @property
    def users_file(self) -> Path:
        return self.data_dir / "users.json"

    @property
    def sessions_file(self) -> Path:
        return self.data_dir / "sessions.json"

    @property
    def login_attempts_file(self) -> Path:
        return self.data_dir / "rate-limits.json"

    @property
    def default_log_file(self) -> Path:
        return self.data_dir / "logs" / "admin.log"


class AuthConfig(BaseSettings):
    session_ttl_hours: float = Field(24.0, gt=0, alias="SESSION_TTL_HOURS")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    cookie_name: str = Field("auth_token", alias="AUTH_COOKIE_NAME")

    model_config = _section_config()

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.session_ttl_hours)


class LoginLimitConfig(BaseSettings):
    max_attempts: int = Field(5, ge=1, alias="LOGIN_MAX_ATTEMPTS")
    window_minutes: float = Field(15.0, gt=0, alias="LOGIN_WINDOW_MINUTES")
    block_minutes: float = Field(30.0, gt=0, alias="LOGIN_BLOCK_MINUTES")
    cleanup_interval: float = Field(300.0, ge=0, alias="LOGIN_CLEANUP_INTERVAL")

    model_config = _section_config()


class SecurityConfig(BaseSettings):
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")
    allowed_origins: str = Field("*", alias="ALLOWED_ORIGINS")

    # Comma separated CIDRs; forwarded client-address headers are honoured only from these peers
    trusted_proxies: str = Field("", alias="TRUSTED_PROXIES")

    model_config = _section_config()

    @field_validator("trusted_proxies", mode="after")
    @classmethod
    def _validate_proxies(cls, value: str) -> str:
        for item in value.split(","):
            if item.strip():
                ip_network(item.strip(), strict=False)
        return value

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @property
    def origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def trusted_networks(self) -> list[IPv4Network | IPv6Network]:
        return [
            ip_network(item.strip(), strict=False)
            for item in self.trusted_proxies.split(",")
            if item.strip()
        ]


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _login_limit_config_factory() -> LoginLimitConfig:
    return LoginLimitConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    admin_password: str = Field(DEFAULT_ADMIN_PASSWORD, alias="ADMIN_PASSWORD")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    # Defaults to <DATA_DIR>/logs/admin.log
    log_file: Path | None = Field(None, alias="LOG_FILE")

    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    login_limit: LoginLimitConfig = Field(default_factory=_login_limit_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        insecure = [
            name
            for name, value in (("SECRET_KEY", self.secret_key), ("JWT_SECRET", self.jwt_secret))
            if value in _INSECURE_SECRETS
        ]
        if insecure:
            print(
                f"\n❌ CRITICAL SECURITY ERROR: Insecure {', '.join(insecure)} detected in production!\n"
                "   Secrets must be strong random values in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if self.admin_password == DEFAULT_ADMIN_PASSWORD:
            warnings.append("⚠️  ADMIN_PASSWORD uses the default value")
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if not self.security.trusted_proxies:
            warnings.append("⚠️  TRUSTED_PROXIES is empty, forwarded client IPs are ignored")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider fixing these settings in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DEFAULT_ADMIN_PASSWORD",
    "LoginLimitConfig",
    "SecurityConfig",
    "StorageConfig",
    "load_config",
]
