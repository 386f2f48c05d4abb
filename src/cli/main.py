"""CLI principal (Typer).

Comandos:
- `serve`: levanta el servidor HTTP (uvicorn) con la API y el formulario.
- `lookup`: consulta una cédula desde la terminal.
- `split`: aplica la separación de nombres a un string.
- `doctor`: diagnóstico y configuración.
"""

from __future__ import annotations

import asyncio
import json

import typer
import uvicorn
from rich.console import Console

from adapters.sri_source import SriIdentifierSource
from cli import doctor
from cli.ui_components import build_error_panel, build_result_table, print_banner
from core.config import AppSettings
from core.domain.models import NameSplit
from core.domain.names import split_full_name
from core.errors import LookupFailure
from core.logging_setup import configure_logging
from core.services.lookup_service import lookup_by_identifier

app = typer.Typer(no_args_is_help=True, help="Consulta de nombres por número de cédula (SRI Ecuador).")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logs en nivel DEBUG."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Interfaz de escucha (por defecto, config)."),
    port: int | None = typer.Option(None, help="Puerto (por defecto, config)."),
    reload: bool = typer.Option(False, help="Recarga automática (desarrollo)."),
) -> None:
    """Levanta el servidor HTTP."""

    settings = AppSettings()
    host = host or settings.host
    port = port or settings.port

    print_banner(_console)
    _console.print(f"Servidor en [bold]http://{host}:{port}[/bold]")
    _console.print("Consulta por cédula: [cyan]/api/consultar[/cyan]")
    _console.print(
        f"Consulta por nombres: [cyan]/api/consultar-nombres[/cyan] (modo {settings.name_lookup_mode.value})"
    )
    if settings.static_dir:
        _console.print(f"Archivos estáticos desde [dim]{settings.static_dir}[/dim]")

    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


@app.command()
def lookup(
    cedula: str = typer.Argument(..., help="Cédula de 10 dígitos."),
    as_json: bool = typer.Option(False, "--json", help="Salida JSON (mismo formato que la API)."),
) -> None:
    """Consulta el nombre asociado a una cédula."""

    settings = AppSettings()
    source = SriIdentifierSource(settings)
    try:
        result = asyncio.run(lookup_by_identifier(cedula, source))
    except LookupFailure as exc:
        if as_json:
            typer.echo(json.dumps({"error": exc.message}, ensure_ascii=False))
        else:
            _console.print(build_error_panel(exc.message, status_code=exc.status_code))
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False))
        return

    split = NameSplit(given_name=result.given_name, surname=result.surname)
    _console.print(build_result_table(cedula, split))


@app.command()
def split(name: str = typer.Argument(..., help="Nombre completo, p.ej. 'JUAN CARLOS PEREZ GOMEZ'.")) -> None:
    """Separa un nombre completo en nombres y apellidos."""

    result = split_full_name(name.strip())
    typer.echo(json.dumps(result.model_dump(), ensure_ascii=False))


def run() -> None:
    app()
