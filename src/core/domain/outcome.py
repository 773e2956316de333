"""Result of running a command: a two-arm sum type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Succeeded:
    result: Any = None


@dataclass(frozen=True)
class Failed:
    error: BaseException


Outcome = Union[Succeeded, Failed]
