"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.name_sources import build_name_source
from core.config import AppSettings, NameLookupMode, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_name_source(settings: AppSettings) -> tuple[bool, str]:
    try:
        source = build_name_source(settings)
    except ValueError as exc:
        return False, str(exc)
    return True, type(source).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Consulta Cédula Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("SRI endpoint", "OK", settings.sri_base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_names, detail_names = _check_name_source(settings)
    table.add_row(
        f"Name lookup ({settings.name_lookup_mode.value})",
        "OK" if ok_names else "FAIL",
        detail_names,
    )

    if settings.static_dir is None:
        table.add_row("Static dir", "OPTIONAL", "Not set -> API only")
    elif settings.static_dir.is_dir():
        table.add_row("Static dir", "OK", str(settings.static_dir))
    else:
        table.add_row("Static dir", "FAIL", f"{settings.static_dir} does not exist")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.sri_referer, settings))
    table.add_row("SRI connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_names:
        _console.print(
            "\n[yellow]Note:[/yellow] run `consulta-cedula doctor configure` to set the name lookup URL."
        )


@app.command()
def configure() -> None:
    """Interactive name-lookup setup (stores config in the user config .env)."""

    mode = typer.prompt(
        "Name lookup mode (informational/scrape/disabled)",
        default=NameLookupMode.INFORMATIONAL.value,
        show_default=True,
    ).strip().lower()

    try:
        parsed = NameLookupMode(mode)
    except ValueError as exc:
        raise typer.BadParameter(f"unknown mode: {mode}") from exc

    values: dict[str, str | None] = {"CONSULTA_CEDULA_NAME_LOOKUP_MODE": parsed.value}
    if parsed is NameLookupMode.SCRAPE:
        url = typer.prompt("Form URL").strip()
        if not url:
            raise typer.BadParameter("a form URL is required for scrape mode")
        values["CONSULTA_CEDULA_NAME_LOOKUP_URL"] = url
        selector = typer.prompt("Result CSS selector (optional)", default="", show_default=False).strip()
        # "" sobrescribe (y desactiva) un selector guardado antes.
        values["CONSULTA_CEDULA_NAME_LOOKUP_RESULT_SELECTOR"] = selector

    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved name lookup config to:[/green] {env_path}")
