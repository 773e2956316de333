"""CLI de credctl (Typer).

Por qué así:
- Los comandos de Typer solo arman un `ExecutionContext` y se lo pasan al dispatcher.
- El dispatcher ejecuta el comando y decide qué se imprime.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape

from adapters.credentials_api import CredentialsClient
from adapters.harvest import make_harvester
from cli import doctor
from core.commands import SetCommand, UnsetCommand, ViewCommand
from core.config import AppSettings
from core.domain.models import ExecutionContext, Session
from core.interfaces.credentials import CredentialsStore
from core.services.dispatcher import CommandDispatcher

app = typer.Typer(no_args_is_help=True, help="Manage credentials stored in the registry.")
credentials_app = typer.Typer(no_args_is_help=True, help="Set, unset and view credentials.")
app.add_typer(credentials_app, name="credentials")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_ORG = typer.Option(None, "--org", "-o", help="Organization (default: CREDCTL_ORG).")
_PROJECT = typer.Option(None, "--project", "-p", help="Project (default: CREDCTL_PROJECT).")
_ENVIRONMENT = typer.Option(None, "--environment", "-e", help="Environment (default: dev).")
_SERVICE = typer.Option(None, "--service", "-s", help="Service (default: default).")
_IDENTITY = typer.Option(None, "--identity", "-u", help="Identity (default: *).")
_INSTANCE = typer.Option(None, "--instance", "-i", help="Instance (default: *).")
_VERBOSE = typer.Option(False, "--verbose", "-v", help="Log failure details to stderr.")


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_dispatcher(
    settings: AppSettings,
    *,
    store: CredentialsStore | None = None,
    console: Console | None = None,
) -> CommandDispatcher:
    """Wire the credential commands to a store and register them."""

    store = store or CredentialsClient(settings)
    harvester = make_harvester(settings.path_defaults())
    console = console or _console

    dispatcher = CommandDispatcher()
    for command_cls in (UnsetCommand, SetCommand, ViewCommand):
        dispatcher.register(command_cls(store, harvester, console=console))
    return dispatcher


def _run(name: str, params: list[str], options: dict[str, str | None], verbose: bool) -> None:
    try:
        settings = AppSettings()
        configure_logging("DEBUG" if verbose else settings.log_level)
    except (PydanticValidationError, ValueError) as exc:
        _console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc

    ctx = ExecutionContext(
        session=Session(token=settings.token),
        params=params,
        options=options,
    )
    code = asyncio.run(build_dispatcher(settings).run(name, ctx))
    if code:
        raise typer.Exit(code=code)


def _path_options(**values: str | None) -> dict[str, str | None]:
    return {k: v for k, v in values.items() if v is not None}


@credentials_app.command("unset")
def unset_cmd(
    name: Optional[str] = typer.Argument(None, help="Credential name or full path."),
    org: Optional[str] = _ORG,
    project: Optional[str] = _PROJECT,
    environment: Optional[str] = _ENVIRONMENT,
    service: Optional[str] = _SERVICE,
    identity: Optional[str] = _IDENTITY,
    instance: Optional[str] = _INSTANCE,
    verbose: bool = _VERBOSE,
) -> None:
    """Remove the value of a credential."""

    options = _path_options(
        org=org,
        project=project,
        environment=environment,
        service=service,
        identity=identity,
        instance=instance,
    )
    _run("unset", [name] if name else [], options, verbose)


@credentials_app.command("set")
def set_cmd(
    name: Optional[str] = typer.Argument(None, help="Credential name or full path."),
    value: Optional[str] = typer.Argument(None, help="Value to store."),
    org: Optional[str] = _ORG,
    project: Optional[str] = _PROJECT,
    environment: Optional[str] = _ENVIRONMENT,
    service: Optional[str] = _SERVICE,
    identity: Optional[str] = _IDENTITY,
    instance: Optional[str] = _INSTANCE,
    verbose: bool = _VERBOSE,
) -> None:
    """Store a value in a credential."""

    params = [p for p in (name, value) if p is not None]
    options = _path_options(
        org=org,
        project=project,
        environment=environment,
        service=service,
        identity=identity,
        instance=instance,
    )
    _run("set", params, options, verbose)


@credentials_app.command("view")
def view_cmd(
    org: Optional[str] = _ORG,
    project: Optional[str] = _PROJECT,
    environment: Optional[str] = _ENVIRONMENT,
    service: Optional[str] = _SERVICE,
    identity: Optional[str] = _IDENTITY,
    instance: Optional[str] = _INSTANCE,
    verbose: bool = _VERBOSE,
) -> None:
    """List the credentials under the current path."""

    options = _path_options(
        org=org,
        project=project,
        environment=environment,
        service=service,
        identity=identity,
        instance=instance,
    )
    _run("view", [], options, verbose)


def run() -> None:
    app()
