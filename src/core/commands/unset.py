"""Comando: dejar una credencial sin valor."""

from __future__ import annotations

from core.commands.base import CredentialCommand
from core.domain.models import CredentialEnvelope, ExecutionContext
from core.errors import ValidationError


class UnsetCommand(CredentialCommand):
    """Remove the value of a credential.

    Unsetting is writing the absence marker: the store sees a regular create
    whose value is `create_value(None)`. Whatever the store returns or
    raises reaches the caller untouched.
    """

    name = "unset"
    success_message = "Credential has been unset!"

    async def execute(self, ctx: ExecutionContext) -> CredentialEnvelope:
        if len(ctx.params) < 1:
            raise ValidationError("You must provide one parameter")

        value = self._value_factory(None)
        params = self._harvest(ctx)

        return await self._credentials.create(ctx.session, params, value)
