"""Comando: asignar el valor de una credencial."""

from __future__ import annotations

from core.commands.base import CredentialCommand
from core.domain.models import CredentialEnvelope, ExecutionContext
from core.errors import ValidationError


class SetCommand(CredentialCommand):
    """Store `VALUE` under credential `NAME`."""

    name = "set"
    success_message = "Credential has been set!"

    async def execute(self, ctx: ExecutionContext) -> CredentialEnvelope:
        if len(ctx.params) < 2:
            raise ValidationError("You must provide two parameters")

        value = self._value_factory(ctx.params[1])
        params = self._harvest(ctx)

        return await self._credentials.create(ctx.session, params, value)
