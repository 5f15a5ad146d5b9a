"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import get_document
from adapters.http_errors import HelperError
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        result = await get_document(url, settings=settings)
    except HelperError as exc:
        return False, str(exc)
    title = result.document.title.string.strip() if result.document.title and result.document.title.string else ""
    return True, f"OK {title}".strip()


@app.command()
def run(
    url: str = typer.Option("https://example.com", help="URL used for the connectivity check."),
) -> None:
    """Run baseline diagnostics and show the effective configuration."""

    settings = AppSettings()

    table = Table(title="utilkit doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    table.add_row("User-Agent", "OK", settings.user_agent)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Follow redirects", "OK", str(settings.follow_redirects))
    table.add_row("Log level", "OK", settings.log_level)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    user_agent = typer.prompt("User-Agent", default=settings.user_agent, show_default=True).strip()
    timeout = typer.prompt(
        "HTTP timeout (seconds)",
        default=settings.http_timeout_seconds,
        type=float,
        show_default=True,
    )

    if not user_agent:
        raise typer.BadParameter("user agent is required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be greater than zero")

    env_path = write_user_env_vars(
        {
            "UTILKIT_USER_AGENT": user_agent,
            "UTILKIT_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )
    _console.print(f"[green]Saved:[/green] {env_path}")
