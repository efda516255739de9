from __future__ import annotations

from datetime import timedelta
from ipaddress import ip_network

import pytest
from pydantic import ValidationError

from portfolio_admin.shared.config.settings import (
    AppConfig,
    AuthConfig,
    LoginLimitConfig,
    SecurityConfig,
)


def test_limit_defaults() -> None:
    limits = LoginLimitConfig()

    assert limits.max_attempts == 5
    assert limits.window_minutes == 15
    assert limits.block_minutes == 30
    assert limits.cleanup_interval == 300


def test_limits_read_flat_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOGIN_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("SESSION_TTL_HOURS", "2")

    assert LoginLimitConfig().max_attempts == 3
    assert AuthConfig().session_ttl == timedelta(hours=2)


def test_trusted_proxies_parse_to_networks() -> None:
    security = SecurityConfig(TRUSTED_PROXIES="10.0.0.0/8, 192.168.1.1")

    assert security.trusted_networks == [ip_network("10.0.0.0/8"), ip_network("192.168.1.1/32")]


def test_invalid_trusted_proxy_is_rejected() -> None:
    with pytest.raises(ValidationError):
        SecurityConfig(TRUSTED_PROXIES="not-a-network")


def test_allowed_origins_split() -> None:
    security = SecurityConfig(ALLOWED_ORIGINS="https://a.example, https://b.example")

    assert security.origins == ["https://a.example", "https://b.example"]


def test_production_refuses_default_secrets() -> None:
    with pytest.raises(SystemExit):
        AppConfig(APP_ENV="production", SECRET_KEY="dev", JWT_SECRET="dev")


def test_production_accepts_strong_secrets() -> None:
    config = AppConfig(
        APP_ENV="production",
        SECRET_KEY="k" * 40,
        JWT_SECRET="j" * 40,
        security=SecurityConfig(COOKIE_SECURE="true", TRUSTED_PROXIES="127.0.0.1"),
    )

    assert config.is_production() is True
    assert config.security.cookie_secure is True
