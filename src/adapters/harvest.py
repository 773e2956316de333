"""Harvester por defecto: deriva la credencial destino desde el contexto.

Una credencial se direcciona con un path expression más un nombre:

    /<org>/<project>/<environment>/<service>/<identity>/<instance>/<name>

El primer param posicional es un nombre (el path sale de los flags y luego
de los defaults configurados) o un path completo que empieza con `/`.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError

from core.domain.models import ExecutionContext, HarvestedParams
from core.errors import HarvestError
from core.interfaces.credentials import Harvester

PATH_SEGMENTS: tuple[str, ...] = (
    "org",
    "project",
    "environment",
    "service",
    "identity",
    "instance",
)


def _build(values: dict[str, str]) -> HarvestedParams:
    try:
        return HarvestedParams(**values)
    except PydanticValidationError as exc:
        raise HarvestError(f"Invalid credential path: {exc.errors()[0]['msg']}") from exc


def parse_path(path: str) -> HarvestedParams:
    """Split a full `/org/.../instance/name` path into its segments.

    Exactly one leading slash; empty segments (`//`, trailing `/`) are rejected.
    """

    stripped = path.strip()
    parts = stripped[1:].split("/")
    expected = len(PATH_SEGMENTS) + 1
    if not stripped.startswith("/") or len(parts) != expected or any(not part for part in parts):
        raise HarvestError(
            f"A full credential path needs {expected} segments "
            f"(/{'/'.join(PATH_SEGMENTS)}/name), got: {path}"
        )
    values = dict(zip(PATH_SEGMENTS, parts[:-1]))
    values["name"] = parts[-1]
    return _build(values)


def harvest(
    ctx: ExecutionContext,
    defaults: Mapping[str, str | None] | None = None,
) -> HarvestedParams:
    """Resolve the credential targeted by `ctx`.

    Flags in `ctx.options` win over `defaults`. Pure: no I/O.
    """

    if not ctx.params:
        raise HarvestError("A credential name is required")

    name = ctx.params[0]
    if name.startswith("/"):
        return parse_path(name)

    defaults = defaults or {}
    values: dict[str, str] = {"name": name}
    for segment in PATH_SEGMENTS:
        value = ctx.options.get(segment) or defaults.get(segment)
        if not value:
            raise HarvestError(
                f"Missing --{segment}: pass it as a flag or set CREDCTL_{segment.upper()}"
            )
        values[segment] = value
    return _build(values)


def make_harvester(defaults: Mapping[str, str | None] | None = None) -> Harvester:
    """Bind `defaults` (usually `AppSettings.path_defaults()`) to `harvest`."""

    bound = dict(defaults or {})

    def _harvest(ctx: ExecutionContext) -> HarvestedParams:
        return harvest(ctx, bound)

    return _harvest
