"""Dispatch de comandos.

Por qué un dispatcher:
- Enruta un nombre a su comando registrado y mapea el resultado a un
  `Succeeded | Failed` explícito.
- La presentación y el exit code se deciden aquí, no dentro de los comandos.
"""

from __future__ import annotations

from loguru import logger

from core.commands.base import CredentialCommand
from core.domain.models import ExecutionContext
from core.domain.outcome import Failed, Outcome, Succeeded
from core.errors import UnknownCommandError

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandDispatcher:
    """Registry of commands keyed by name."""

    def __init__(self) -> None:
        self._commands: dict[str, CredentialCommand] = {}

    def register(self, command: CredentialCommand, name: str | None = None) -> None:
        key = name or command.name
        if key in self._commands:
            existing = type(self._commands[key]).__name__
            raise ValueError(
                f"Duplicate command name '{key}': {existing} and {type(command).__name__}"
            )
        self._commands[key] = command

    def get(self, name: str) -> CredentialCommand:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    @property
    def names(self) -> list[str]:
        return sorted(self._commands)

    async def dispatch(self, name: str, ctx: ExecutionContext) -> Outcome:
        command = self.get(name)
        logger.debug("Running command {} with {} param(s)", name, len(ctx.params))
        try:
            result = await command.execute(ctx)
        except Exception as exc:
            return Failed(exc)
        return Succeeded(result)

    def present(self, name: str, outcome: Outcome) -> int:
        command = self.get(name)
        if isinstance(outcome, Succeeded):
            command.on_success(outcome.result)
            return EXIT_OK
        if isinstance(outcome, Failed):
            # The printed message stays generic; the cause goes to the log.
            error = outcome.error
            logger.opt(exception=error).debug("Command {} failed: {}", name, error)
            command.on_failure()
            return EXIT_FAILURE
        raise TypeError(f"Not an outcome: {outcome!r}")

    async def run(self, name: str, ctx: ExecutionContext) -> int:
        outcome = await self.dispatch(name, ctx)
        return self.present(name, outcome)
