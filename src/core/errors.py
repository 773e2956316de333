"""Taxonomía de errores de credctl.

Por qué:
- Los comandos lanzan, el dispatcher convierte la excepción en `Failed` y la
  CLI convierte el resultado en exit code. Nadie en medio se traga errores.
"""

from __future__ import annotations


class CredctlError(Exception):
    """Base class for every error raised on purpose by credctl."""


class ValidationError(CredctlError):
    """User input that a command cannot work with (missing params, etc.)."""


class HarvestError(ValidationError):
    """The target credential path could not be derived from the context."""


class UnknownCommandError(CredctlError):
    """No command is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name!r}")
        self.name = name


class CredentialsAPIError(CredctlError):
    """The registry answered with an error or with a payload we can't read."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
