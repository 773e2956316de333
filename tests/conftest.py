"""Shared fixtures for credctl tests."""

from __future__ import annotations

import io
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from loguru import logger
from rich.console import Console

from core.config import AppSettings, get_user_env_file
from core.domain.models import (
    CredentialEnvelope,
    ExecutionContext,
    HarvestedParams,
    Session,
)


@pytest.fixture(autouse=True)
def _reset_loguru():
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep the developer's real config out of AppSettings."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    # env_file is bound when core.config is imported, before XDG is patched.
    monkeypatch.setitem(
        AppSettings.model_config,
        "env_file",
        (str(tmp_path / ".env"), str(get_user_env_file())),
    )
    for key in list(os.environ):
        if key.upper().startswith("CREDCTL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def session():
    return Session(token="s3ss10n")


@pytest.fixture
def target():
    return HarvestedParams(
        org="acme",
        project="api",
        environment="dev",
        service="default",
        name="db-password",
    )


@pytest.fixture
def envelope_payload():
    return {
        "id": "0d1ckcx4v6avg4ydjcyfqa1zxa6hy",
        "version": 1,
        "body": {
            "name": "db-password",
            "pathexp": "/acme/api/dev/default/*/*",
            "value": {"version": 1, "body": {"type": "undefined", "value": ""}},
        },
    }


@pytest.fixture
def envelope(envelope_payload):
    return CredentialEnvelope.model_validate(envelope_payload)


@pytest.fixture
def store(envelope):
    fake = MagicMock()
    fake.create = AsyncMock(return_value=envelope)
    fake.get = AsyncMock(return_value=[envelope])
    return fake


@pytest.fixture
def harvester(target):
    return MagicMock(return_value=target)


@pytest.fixture
def make_ctx(session):
    def _make(*params: str, **options: str) -> ExecutionContext:
        return ExecutionContext(session=session, params=list(params), options=options)

    return _make
