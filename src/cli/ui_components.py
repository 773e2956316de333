"""Componentes UI de la CLI (Rich).

Por qué separar componentes:
- Mantiene los comandos simples.
- Permite reutilizar tablas/paneles entre `doctor` y `credentials view`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Solo lo usan comandos interactivos (`doctor`); la salida de `credentials` queda limpia.
    """

    title = Text("credctl", style="bold cyan")
    subtitle = Text("Credentials • Paths • Registry", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_checks_table(title: str = "credctl doctor") -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
