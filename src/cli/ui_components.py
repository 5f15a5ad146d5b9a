"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def build_cookies_table(jar: httpx.Cookies) -> Table:
    """Tabla Rich con el contenido del cookie jar."""

    table = Table(title="Cookies")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_column("Domain", style="magenta")
    table.add_column("Path", style="dim")
    for cookie in jar.jar:
        table.add_row(cookie.name, cookie.value or "", cookie.domain, cookie.path)
    return table


def build_document_panel(summary: Mapping[str, Any], *, url: str) -> Panel:
    """Panel con la metadata de un documento HTML."""

    body = Text()
    body.append(f"{url}\n", style="dim")
    if not summary:
        body.append("(sin metadata)", style="dim")
    for key in ("title", "meta_description", "og_image"):
        if key in summary:
            body.append(f"{key}: ", style="bold")
            body.append(f"{summary[key]}\n")
    return Panel(body, title=Text("Documento", style="bold cyan"), border_style="cyan")


def build_matches_table(selector: str, texts: Iterable[str]) -> Table:
    table = Table(title=f"Matches for {selector!r}")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Text", style="white")
    for index, text in enumerate(texts, start=1):
        table.add_row(str(index), text)
    return table
