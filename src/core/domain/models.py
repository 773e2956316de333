"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación y normalización en el borde del sistema.
- El registry habla envelopes versionados (`{"version": 1, "body": {...}}`)
  tanto para credenciales como para sus valores; aquí se parsean una sola vez.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

_UNSET_TYPE = "undefined"
_WIRE_VERSION = 1


class Session(BaseModel):
    """Opaque auth handle forwarded to the credentials store."""

    model_config = ConfigDict(frozen=True)

    token: str | None = Field(
        default=None,
        description="Bearer token for the registry daemon, if any.",
    )

    @property
    def authenticated(self) -> bool:
        return bool(self.token)


class ExecutionContext(BaseModel):
    """Lo que un comando recibe del dispatcher.

    Por qué existe:
    - `params` son los argumentos posicionales, ya tokenizados por la CLI.
    - `options` guarda los flags de path (org, project, environment...), que
      pueden faltar o ser `None`; el harvester decide los defaults.
    """

    session: Session = Field(default_factory=Session)
    params: list[str] = Field(default_factory=list)
    options: dict[str, str | None] = Field(default_factory=dict)


class CredentialValue(BaseModel):
    """Valor de una credencial, posiblemente ausente.

    `raw is None` significa "sin valor": escribirlo en el registry deja la
    credencial sin valor (unset).
    """

    model_config = ConfigDict(frozen=True)

    raw: str | int | float | None = Field(
        default=None,
        description="Raw value; None is the absence marker.",
    )

    @property
    def is_unset(self) -> bool:
        return self.raw is None

    @property
    def value_type(self) -> str:
        if self.raw is None:
            return _UNSET_TYPE
        if isinstance(self.raw, str):
            return "string"
        return "number"

    def to_body(self) -> dict[str, Any]:
        return {"type": self.value_type, "value": "" if self.raw is None else self.raw}

    def to_wire(self) -> dict[str, Any]:
        return {"version": _WIRE_VERSION, "body": self.to_body()}

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> "CredentialValue":
        """Parse a `{"version": 1, "body": {"type", "value"}}` payload."""

        version = payload.get("version")
        if version != _WIRE_VERSION:
            raise ValueError(f"Unsupported value version: {version!r}")

        body = payload.get("body") or {}
        kind = body.get("type")
        if kind == _UNSET_TYPE:
            return cls(raw=None)
        if kind == "string":
            return cls(raw=str(body.get("value", "")))
        if kind == "number":
            number = body.get("value")
            if isinstance(number, bool) or not isinstance(number, (int, float)):
                raise ValueError(f"Invalid number value: {number!r}")
            return cls(raw=number)
        raise ValueError(f"Unknown value type: {kind!r}")

    def display(self) -> str:
        return "<unset>" if self.raw is None else str(self.raw)


def create_value(raw: str | int | float | None) -> CredentialValue:
    """Factory de valores: envuelve `raw` (o None, el marcador de ausencia).

    Solo valida el tipo; un string vacío es un valor válido.
    """

    if raw is not None and (isinstance(raw, bool) or not isinstance(raw, (str, int, float))):
        raise TypeError(f"Unsupported credential value type: {type(raw).__name__}")
    return CredentialValue(raw=raw)


class HarvestedParams(BaseModel):
    """Which credential a command targets, derived from the context."""

    model_config = ConfigDict(frozen=True)

    org: str = Field(..., min_length=1)
    project: str = Field(..., min_length=1)
    environment: str = Field(..., min_length=1)
    service: str = Field(..., min_length=1)
    identity: str = Field(default="*", min_length=1)
    instance: str = Field(default="*", min_length=1)
    name: str = Field(..., min_length=1, max_length=256)

    @property
    def pathexp(self) -> str:
        segments = (
            self.org,
            self.project,
            self.environment,
            self.service,
            self.identity,
            self.instance,
        )
        return "/" + "/".join(segments)

    @property
    def path(self) -> str:
        return f"{self.pathexp}/{self.name}"


class CredentialBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    pathexp: str = Field(..., min_length=1)
    value: CredentialValue

    @field_validator("value", mode="before")
    @classmethod
    def _parse_wire_value(cls, value: Any) -> Any:
        if isinstance(value, dict) and "body" in value:
            return CredentialValue.from_wire(value)
        return value

    @property
    def path(self) -> str:
        return f"{self.pathexp}/{self.name}"


class CredentialEnvelope(BaseModel):
    """A credential as returned by the registry."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = Field(
        default=None,
        description="Registry identifier (absent on objects not yet stored).",
    )
    version: int = Field(
        default=_WIRE_VERSION,
        description="Envelope schema version; only version 1 is understood.",
    )
    body: CredentialBody
