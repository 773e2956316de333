"""Contratos para los colaboradores de los comandos de credenciales.

Por qué Protocol:
- Los tests pasan un `MagicMock`/`AsyncMock` sin heredar de nada.
- `CredentialsClient` cumple el contrato sin importar el core de comandos.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import (
    CredentialEnvelope,
    CredentialValue,
    ExecutionContext,
    HarvestedParams,
    Session,
)


@runtime_checkable
class CredentialsStore(Protocol):
    """Dónde viven las credenciales (normalmente el daemon del registry).

    Ambos métodos son async porque hacen I/O. Los errores salen como
    excepciones; quien llama no está obligado a capturarlas.
    """

    async def create(
        self,
        session: Session,
        params: HarvestedParams,
        value: CredentialValue,
    ) -> CredentialEnvelope:
        """Record that the credential at `params` now holds `value`."""

        ...

    async def get(self, session: Session, path: str) -> list[CredentialEnvelope]:
        """Return every credential stored under `path`."""

        ...


@runtime_checkable
class Harvester(Protocol):
    """Pure function deriving the target credential from a context."""

    def __call__(self, ctx: ExecutionContext) -> HarvestedParams: ...
