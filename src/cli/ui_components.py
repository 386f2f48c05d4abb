"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import NameSplit


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("CONSULTA CÉDULA", style="bold cyan")
    subtitle = Text("SRI Ecuador • Nombres y apellidos por cédula", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_table(identifier: str, split: NameSplit) -> Table:
    table = Table(title="Resultado")
    table.add_column("Cédula", style="cyan", no_wrap=True)
    table.add_column("Nombres", style="white")
    table.add_column("Apellidos", style="magenta")
    table.add_row(identifier, split.given_name, split.surname or "-")
    return table


def build_error_panel(message: str, *, status_code: int | None = None) -> Panel:
    """Panel de error con el mismo mensaje que vería un cliente HTTP."""

    title = Text("Error", style="bold red")
    body = Text(message)
    if status_code is not None:
        body.append(f"\n\nHTTP equivalente: {status_code}", style="dim")
    return Panel(body, title=title, border_style="red")
