"""
Tests for the Typer CLI wiring.
"""

from __future__ import annotations

import io
import sys
from unittest.mock import AsyncMock, patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from cli.main import app, configure_logging
from core.domain.models import create_value

runner = CliRunner()


@pytest.fixture
def client_cls(store):
    with patch("cli.main.CredentialsClient") as cls:
        cls.return_value = store
        yield cls


@pytest.fixture(autouse=True)
def _path_defaults(monkeypatch):
    monkeypatch.setenv("CREDCTL_ORG", "acme")
    monkeypatch.setenv("CREDCTL_PROJECT", "api")
    monkeypatch.setenv("CREDCTL_TOKEN", "tok")


class TestUnset:
    def test_success(self, client_cls, store, target):
        result = runner.invoke(app, ["credentials", "unset", "db-password"])

        assert result.exit_code == 0
        assert "Credential has been unset!" in result.output
        session, params, value = store.create.await_args.args
        assert session.token == "tok"
        assert params == target
        assert value == create_value(None)

    def test_missing_name(self, client_cls, store):
        result = runner.invoke(app, ["credentials", "unset"])

        assert result.exit_code == 1
        assert "It failed ;(" in result.output
        store.create.assert_not_called()

    def test_store_failure(self, client_cls, store):
        store.create = AsyncMock(side_effect=RuntimeError("network down"))
        result = runner.invoke(app, ["credentials", "unset", "db-password"])

        assert result.exit_code == 1
        assert "It failed ;(" in result.output
        assert "network down" not in result.output

    def test_flags(self, client_cls, store):
        result = runner.invoke(
            app,
            ["credentials", "unset", "db-password", "--environment", "prod", "--service", "web"],
        )

        assert result.exit_code == 0
        params = store.create.await_args.args[1]
        assert params.pathexp == "/acme/api/prod/web/*/*"

    def test_missing_project(self, client_cls, store, monkeypatch):
        monkeypatch.delenv("CREDCTL_PROJECT")
        result = runner.invoke(app, ["credentials", "unset", "db-password"])

        assert result.exit_code == 1
        store.create.assert_not_called()


class TestSetAndView:
    def test_set(self, client_cls, store):
        result = runner.invoke(app, ["credentials", "set", "db-password", "hunter2"])

        assert result.exit_code == 0
        assert "Credential has been set!" in result.output
        assert store.create.await_args.args[2] == create_value("hunter2")

    def test_view(self, client_cls, store):
        result = runner.invoke(app, ["credentials", "view"])

        assert result.exit_code == 0
        assert "db-password" in result.output
        store.get.assert_awaited_once()
        assert store.get.await_args.args[1] == "/acme/api/dev/default/*/*"


class TestLogging:
    @staticmethod
    def _capture_into(sink: io.StringIO, levels: list[str]):
        def _configure(level: str) -> None:
            levels.append(level)
            logger.remove()
            logger.add(sink, level=level, format="{message}")

        return _configure

    def test_verbose_logs_failure_cause(self, client_cls, store):
        store.create = AsyncMock(side_effect=RuntimeError("network down"))
        sink, levels = io.StringIO(), []

        with patch("cli.main.configure_logging", side_effect=self._capture_into(sink, levels)):
            result = runner.invoke(app, ["credentials", "unset", "db-password", "--verbose"])

        assert result.exit_code == 1
        assert levels == ["DEBUG"]
        assert "network down" in sink.getvalue()
        assert "It failed ;(" in result.output
        assert "network down" not in result.output

    def test_quiet_by_default(self, client_cls, store):
        store.create = AsyncMock(side_effect=RuntimeError("network down"))
        sink, levels = io.StringIO(), []

        with patch("cli.main.configure_logging", side_effect=self._capture_into(sink, levels)):
            result = runner.invoke(app, ["credentials", "unset", "db-password"])

        assert result.exit_code == 1
        assert levels == ["WARNING"]
        assert sink.getvalue() == ""

    def test_configure_logging_writes_to_stderr(self, monkeypatch):
        stream = io.StringIO()
        monkeypatch.setattr(sys, "stderr", stream)

        configure_logging("debug")
        logger.debug("registry reachable")

        assert "registry reachable" in stream.getvalue()

    def test_configure_logging_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")


class TestInvalidConfiguration:
    @pytest.mark.parametrize(
        "key,value",
        [("CREDCTL_LOG_LEVEL", "LOUD"), ("CREDCTL_HTTP_TIMEOUT_SECONDS", "-1")],
    )
    def test_exits_with_message(self, client_cls, store, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        result = runner.invoke(app, ["credentials", "unset", "db-password"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert not isinstance(result.exception, (ValueError, TypeError))
        store.create.assert_not_called()
