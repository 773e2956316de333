"""Cliente del registry para credenciales.

Habla con los endpoints `/credentials` del daemon:

- `POST /credentials` con un envelope versión 1 crea (o sobrescribe) una
  credencial. Escribir un valor `undefined` es como se hace unset.
- `GET /credentials?path=<pathexp>` lista las credenciales bajo un path.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import (
    CredentialEnvelope,
    CredentialValue,
    HarvestedParams,
    Session,
)
from core.errors import CredentialsAPIError
from core.interfaces.credentials import CredentialsStore

_ENVELOPE_VERSION = 1


def _error_message(response: httpx.Response) -> str:
    """Best-effort human message from an error response."""

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, list) and error:
            return "; ".join(str(e) for e in error)
        if isinstance(error, str) and error:
            return error

    text = response.text.strip()
    return text or response.reason_phrase or f"HTTP {response.status_code}"


def parse_envelope(payload: Any) -> CredentialEnvelope:
    """Validate one credential envelope coming from the registry."""

    if not isinstance(payload, dict):
        raise CredentialsAPIError(f"Malformed credential payload: {payload!r}")

    version = payload.get("version")
    if version != _ENVELOPE_VERSION:
        raise CredentialsAPIError(f"Unknown credential version: {version!r}")

    try:
        return CredentialEnvelope.model_validate(payload)
    except (PydanticValidationError, ValueError) as exc:
        raise CredentialsAPIError(f"Invalid credential payload: {exc}") from exc


class CredentialsClient(CredentialsStore):
    """`CredentialsStore` backed by the registry daemon over HTTP."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def create(
        self,
        session: Session,
        params: HarvestedParams,
        value: CredentialValue,
    ) -> CredentialEnvelope:
        envelope = {
            "version": _ENVELOPE_VERSION,
            "body": {
                "name": params.name,
                "pathexp": params.pathexp,
                "value": value.to_wire(),
            },
        }
        payload = await self._request(session, "POST", "/credentials", json=envelope)
        return parse_envelope(payload)

    async def get(self, session: Session, path: str) -> list[CredentialEnvelope]:
        payload = await self._request(session, "GET", "/credentials", params={"path": path})
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise CredentialsAPIError(f"Expected a list of credentials, got {type(payload).__name__}")
        return [parse_envelope(item) for item in payload]

    async def _request(self, session: Session, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("{} {} (authenticated={})", method, url, session.authenticated)
        async with build_async_client(
            self._settings,
            session=session,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                raise CredentialsAPIError(f"Could not reach the registry: {exc}") from exc

        logger.debug("{} {} -> HTTP {}", method, url, response.status_code)
        if response.is_error:
            raise CredentialsAPIError(_error_message(response), status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise CredentialsAPIError(
                "Registry returned invalid JSON",
                status_code=response.status_code,
            ) from exc
