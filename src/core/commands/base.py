"""Base común de los comandos que hablan con un store de credenciales."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar

from rich.console import Console

from core.domain.models import CredentialValue, ExecutionContext, create_value
from core.interfaces.credentials import CredentialsStore, Harvester

ValueFactory = Callable[[Any], CredentialValue]


class CredentialCommand(ABC):
    """Async operation plus its success/failure presentation."""

    name: ClassVar[str]
    success_message: ClassVar[str] = ""
    failure_message: ClassVar[str] = "It failed ;("

    def __init__(
        self,
        credentials: CredentialsStore,
        harvest: Harvester,
        *,
        value_factory: ValueFactory = create_value,
        console: Console | None = None,
    ) -> None:
        self._credentials = credentials
        self._harvest = harvest
        self._value_factory = value_factory
        self._console = console or Console()

    @abstractmethod
    async def execute(self, ctx: ExecutionContext) -> Any:
        """Run the command; raise on failure, never print."""

    def on_success(self, result: Any = None) -> None:
        self._console.print(self.success_message, highlight=False)

    def on_failure(self) -> None:
        self._console.print(self.failure_message, highlight=False)
