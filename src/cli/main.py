"""CLI principal (Typer).

Comandos:
- `resolve`: resuelve uno o varios usernames y muestra tabla o JSON.
- `doctor`: diagnósticos y configuración del endpoint del scraper.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_profiles_json, profiles_to_json
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import build_profiles_table, print_banner
from core.config import AppSettings
from core.services.configurations import clean_username
from core.services.profile_resolution import ProfileResolutionService

app = typer.Typer(no_args_is_help=True, help="Resolve Instagram usernames into display profiles.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.command()
def resolve(
    usernames: List[str] = typer.Argument(..., help="One or more usernames (a leading @ is ignored)."),
    as_json: bool = typer.Option(False, "--json", help="Print profiles as JSON instead of a table."),
    export: Optional[Path] = typer.Option(None, "--export", help="Also write the profiles to this JSON file."),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, help="Usernames resolved in parallel."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Resolve usernames through the configured scraper."""

    empty = [name for name in usernames if not clean_username(name)]
    if empty:
        raise typer.BadParameter(f"empty username: {empty[0]!r}", param_hint="USERNAMES")

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    if not settings.scraper_endpoint_url:
        _err_console.print(
            "[yellow]No scraper endpoint configured.[/yellow] Run `insta-resolver doctor setup` "
            "or set INSTA_RESOLVER_SCRAPER_ENDPOINT_URL."
        )

    service = ProfileResolutionService(settings)
    profiles = asyncio.run(service.resolve_many(usernames, max_concurrency=concurrency))

    if as_json:
        typer.echo(profiles_to_json(profiles))
    else:
        print_banner(_console)
        _console.print(build_profiles_table(profiles, settings.placeholder_avatar_base_url))

    if export is not None:
        path = export_profiles_json(profiles=profiles, output_path=export)
        _err_console.print(f"[green]Saved JSON to:[/green] {path}")

    if not any(p.exists for p in profiles):
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
