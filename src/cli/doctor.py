"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console

from adapters.http_client import build_async_client
from cli.ui_components import build_checks_table, print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import Session

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_daemon(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    try:
        async with build_async_client(
            settings,
            session=Session(token=settings.token),
            transport=transport,
        ) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = build_checks_table()

    if settings.token:
        table.add_row("Session token", "OK", "Token configured")
    else:
        table.add_row("Session token", "MISSING", "Set CREDCTL_TOKEN or run `credctl doctor setup`")

    for segment, value in settings.path_defaults().items():
        if value:
            table.add_row(f"Default {segment}", "OK", value)
        else:
            table.add_row(f"Default {segment}", "OPTIONAL", f"Pass --{segment} on each call")

    target = str(settings.socket_path) if settings.socket_path else settings.api_base_url
    ok_daemon, detail_daemon = asyncio.run(_check_daemon(settings))
    table.add_row("Daemon", "OK" if ok_daemon else "FAIL", f"{target}: {detail_daemon}")

    _console.print(table)
    _console.print(f"[dim]User config: {get_user_env_file()}[/dim]")


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    api_base_url = typer.prompt("Daemon URL", default=settings.api_base_url, show_default=True).strip()
    org = typer.prompt("Default org", default=settings.org or "", show_default=True).strip()
    project = typer.prompt("Default project", default=settings.project or "", show_default=True).strip()
    environment = typer.prompt("Default environment", default=settings.environment, show_default=True).strip()
    service = typer.prompt("Default service", default=settings.service, show_default=True).strip()
    token = typer.prompt(
        "Session token (leave empty to keep)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    if not api_base_url:
        raise typer.BadParameter("daemon URL is required")

    env_path = write_user_env_vars(
        {
            "CREDCTL_API_BASE_URL": api_base_url,
            "CREDCTL_ORG": org or None,
            "CREDCTL_PROJECT": project or None,
            "CREDCTL_ENVIRONMENT": environment or None,
            "CREDCTL_SERVICE": service or None,
            "CREDCTL_TOKEN": token or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
