"""Comando: listar las credenciales bajo un path."""

from __future__ import annotations

from rich.table import Table

from core.commands.base import CredentialCommand
from core.domain.models import CredentialEnvelope, ExecutionContext


class ViewCommand(CredentialCommand):
    """Show every credential under the current path expression.

    Takes no positional params; the name slot is filled with a placeholder so
    the harvester can still resolve the path flags.
    """

    name = "view"
    failure_message = "Could not retrieve credentials ;("

    async def execute(self, ctx: ExecutionContext) -> list[CredentialEnvelope]:
        if not ctx.params:
            ctx = ctx.model_copy(update={"params": ["*"]})
        params = self._harvest(ctx)
        return await self._credentials.get(ctx.session, params.pathexp)

    def on_success(self, result: list[CredentialEnvelope] | None = None) -> None:
        creds = result or []
        if not creds:
            self._console.print("No credentials found.", highlight=False)
            return

        table = Table(title="Credentials")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Path", style="magenta")
        table.add_column("Value", style="white")
        for cred in sorted(creds, key=lambda c: c.body.name):
            table.add_row(cred.body.name, cred.body.pathexp, cred.body.value.display())
        self._console.print(table)
