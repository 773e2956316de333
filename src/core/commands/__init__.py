"""Comandos de credenciales.

Cada comando es un objeto con una operación async (`execute`) y dos
callbacks de presentación (`on_success`, `on_failure`). El dispatcher decide
cuál corre; `execute` nunca imprime.
"""

from core.commands.base import CredentialCommand
from core.commands.set import SetCommand
from core.commands.unset import UnsetCommand
from core.commands.view import ViewCommand

__all__ = ["CredentialCommand", "SetCommand", "UnsetCommand", "ViewCommand"]
