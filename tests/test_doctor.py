"""
Tests for the doctor commands.

Covers:
- Daemon reachability check (httpx.MockTransport)
- `doctor run` report rows
- `doctor setup` writing the user .env
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
from typer.testing import CliRunner

from cli.doctor import _check_daemon
from cli.main import app
from core.config import AppSettings, get_user_env_file

runner = CliRunner()


class TestCheckDaemon:
    def test_reachable(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        settings = AppSettings(api_base_url="http://daemon.test", token="tok")
        ok, detail = asyncio.run(_check_daemon(settings, transport=httpx.MockTransport(handler)))

        assert ok
        assert detail == "HTTP 200"
        assert seen[0].headers["Authorization"] == "Bearer tok"

    def test_error_status_still_means_reachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        ok, detail = asyncio.run(
            _check_daemon(AppSettings(), transport=httpx.MockTransport(handler))
        )
        assert ok
        assert detail == "HTTP 404"

    def test_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("daemon down", request=request)

        ok, detail = asyncio.run(
            _check_daemon(AppSettings(), transport=httpx.MockTransport(handler))
        )
        assert not ok
        assert "daemon down" in detail


class TestDoctorRun:
    def test_reports_missing_token(self):
        with patch("cli.doctor._check_daemon", AsyncMock(return_value=(True, "HTTP 200"))):
            result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0
        assert "Session token" in result.output
        assert "MISSING" in result.output
        assert "Daemon" in result.output

    def test_reports_configured_values(self, monkeypatch):
        monkeypatch.setenv("CREDCTL_TOKEN", "tok")
        monkeypatch.setenv("CREDCTL_ORG", "acme")
        with patch("cli.doctor._check_daemon", AsyncMock(return_value=(False, "refused"))) as check:
            result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0
        assert "Token configured" in result.output
        assert "acme" in result.output
        assert "FAIL" in result.output
        check.assert_awaited_once()


class TestDoctorSetup:
    def test_writes_user_env(self):
        answers = "http://daemon.test\nacme\napi\nprod\nweb\n\n"
        result = runner.invoke(app, ["doctor", "setup"], input=answers)

        assert result.exit_code == 0
        lines = get_user_env_file().read_text(encoding="utf-8").splitlines()
        assert lines == [
            "# credctl user config (.env)",
            "CREDCTL_API_BASE_URL=http://daemon.test",
            "CREDCTL_ENVIRONMENT=prod",
            "CREDCTL_ORG=acme",
            "CREDCTL_PROJECT=api",
            "CREDCTL_SERVICE=web",
        ]

    def test_stores_token_when_given(self):
        answers = "http://daemon.test\nacme\napi\ndev\ndefault\ns3cret\n"
        result = runner.invoke(app, ["doctor", "setup"], input=answers)

        assert result.exit_code == 0
        content = get_user_env_file().read_text(encoding="utf-8")
        assert "CREDCTL_TOKEN=s3cret" in content

    def test_settings_pick_up_saved_values(self):
        answers = "http://daemon.test\nacme\napi\nprod\nweb\n\n"
        runner.invoke(app, ["doctor", "setup"], input=answers)

        settings = AppSettings()
        assert settings.api_base_url == "http://daemon.test"
        assert settings.path_defaults()["org"] == "acme"
        assert settings.token is None
