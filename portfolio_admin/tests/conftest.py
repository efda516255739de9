from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from portfolio_admin.app import create_app
from portfolio_admin.container import Container
from portfolio_admin.domain.users.repositories import PasswordHasher
from portfolio_admin.shared.config import AppConfig
from portfolio_admin.shared.config.settings import StorageConfig
from portfolio_admin.shared.logging import logger

ADMIN_PASSWORD = "admin-pass-1"


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture()
def config(tmp_path: Path, content_dir: Path) -> AppConfig:
    return AppConfig(
        APP_ENV="development",
        SECRET_KEY="test-secret-key",
        JWT_SECRET="test-jwt-secret",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        storage=StorageConfig(DATA_DIR=tmp_path / "data", CONTENT_DIR=content_dir),
    )


@pytest.fixture()
def container(config: AppConfig, clock: FakeClock) -> Container:
    container = Container(config, clock=clock)
    container.password_hasher = DeterministicHasher()  # type: ignore[assignment]
    return container


@pytest.fixture()
def app(config: AppConfig, container: Container) -> Flask:
    return create_app(config, container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)


def fail_writes(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(*_args: object, **_kwargs: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("portfolio_admin.infrastructure.storage.write_json_list", _raise)
