"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import InstagramProfile
from core.services.placeholder import is_placeholder_avatar


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se omite en modo `--json` para no ensuciar stdout.
    """

    title = Text("insta-resolver", style="bold magenta")
    subtitle = Text("Username → nombre visible • avatar HD • existencia", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="magenta", padding=(1, 4)))


def profile_status(profile: InstagramProfile, placeholder_base_url: str) -> str:
    if not profile.exists:
        return "lookup failed"
    if not profile.avatar_url:
        return "no image"
    if is_placeholder_avatar(profile.avatar_url, placeholder_base_url):
        return "placeholder"
    return "found"


def build_profiles_table(profiles: Sequence[InstagramProfile], placeholder_base_url: str) -> Table:
    table = Table(title="Instagram Profiles")
    table.add_column("Username", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Exists", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("Avatar", style="magenta", overflow="fold")

    for p in profiles:
        table.add_row(
            p.username,
            p.display_name or "-",
            "yes" if p.exists else "no",
            profile_status(p, placeholder_base_url),
            p.avatar_url or "-",
        )
    return table
