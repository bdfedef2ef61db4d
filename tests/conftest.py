"""Shared fixtures for the portfolio backend tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from portfolio_api.api.dependencies import get_transport
from portfolio_api.core.config import Settings
from portfolio_api.main import create_app
from portfolio_api.models.contact import OutboundEmail


class StubTransport:
    """Records every message; raises `error` instead of sending when set."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: list[OutboundEmail] = []
        self.calls = 0

    async def send(self, message: OutboundEmail) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        self.sent.append(message)


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = {
        "email_service": "gmail",
        "email_user": "owner@example.com",
        "email_pass": "app-password",
        "app_env": "production",
        "resume_path": tmp_path / "resume.pdf",
        "email_timeout": 10.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def client_factory(tmp_path: Path) -> Callable[..., TestClient]:
    """Build a TestClient around a fresh app with the given transport and settings."""

    def _factory(transport: StubTransport | None = None, **overrides) -> TestClient:
        app = create_app(make_settings(tmp_path, **overrides))
        stub = transport if transport is not None else StubTransport()
        app.dependency_overrides[get_transport] = lambda: stub
        return TestClient(app)

    return _factory


@pytest.fixture
def client(client_factory, transport: StubTransport) -> TestClient:
    return client_factory(transport)
