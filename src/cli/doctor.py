"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit, urlunsplit

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.scraper_client import scraper_request_params
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.services.placeholder import build_placeholder_avatar_url

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


_RUN_SEGMENTS = ("run-sync", "run-sync-get-dataset-items", "runs")


def task_metadata_url(endpoint: str) -> str | None:
    """URL de metadatos del task a partir del endpoint de ejecución.

    `.../actor-tasks/<task>/run-sync` acepta GET y lanzaría un run (consume cuota);
    `.../actor-tasks/<task>` solo devuelve la definición del task.
    Devuelve None si el endpoint no tiene esa forma.
    """

    parts = urlsplit(endpoint)
    segments = parts.path.rstrip("/").split("/")
    if len(segments) < 2 or segments[-1] not in _RUN_SEGMENTS:
        return None
    return urlunsplit((parts.scheme, parts.netloc, "/".join(segments[:-1]), parts.query, ""))


async def _check_http(url: str, settings: AppSettings, params: dict[str, str] | None = None) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url, params=params or None)
        return response.status_code < 500, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="insta-resolver Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    endpoint = settings.scraper_endpoint_url
    if endpoint:
        table.add_row("Scraper endpoint", "OK", endpoint)
    else:
        table.add_row("Scraper endpoint", "MISSING", "Every lookup will return exists=false")
    if settings.scraper_api_token is not None:
        table.add_row("Scraper token", "OK", "Sent as `token` query parameter")
    else:
        table.add_row("Scraper token", "OPTIONAL", "Only needed if the endpoint URL has no token")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:.0f}s")
    table.add_row("Placeholder avatar", "OK", build_placeholder_avatar_url("doctor", settings))
    table.add_row("User config", "OK" if get_user_env_file().exists() else "NONE", str(get_user_env_file()))

    # Connectivity (best-effort)
    metadata_url = task_metadata_url(endpoint) if endpoint else None
    if metadata_url:
        ok_http, detail_http = asyncio.run(_check_http(metadata_url, settings, scraper_request_params(settings)))
        table.add_row("Scraper reachable", "OK" if ok_http else "FAIL", detail_http)
    elif endpoint:
        table.add_row("Scraper reachable", "SKIPPED", "Unknown endpoint shape; not probing to avoid starting a run")

    _console.print(table)

    if not endpoint:
        _console.print("\n[yellow]Note:[/yellow] Run `insta-resolver doctor setup` to store the endpoint.")


@app.command(name="setup")
def setup() -> None:
    """Interactive scraper setup (stores config in the user config .env)."""

    endpoint = typer.prompt("Scraper task endpoint URL (run-sync)").strip()
    token = typer.prompt(
        "Scraper API token (leave empty if embedded in the URL)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    if not endpoint.startswith(("http://", "https://")):
        raise typer.BadParameter("endpoint must be an http(s) URL")

    env_path = write_user_env_vars(
        {
            "INSTA_RESOLVER_SCRAPER_ENDPOINT_URL": endpoint,
            "INSTA_RESOLVER_SCRAPER_API_TOKEN": token or None,
        }
    )

    _console.print(f"[green]Saved scraper config to:[/green] {env_path}")
