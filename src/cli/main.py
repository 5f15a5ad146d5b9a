"""CLI principal (Typer).

Por qué una CLI sobre una librería de helpers:
- Permite probar cada helper desde la terminal (fechas, azar, HTTP).
- Reutiliza la misma configuración (`AppSettings`) que los adaptadores.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import get_document, get_json, post_form, summarize_document
from adapters.http_errors import HelperError
from adapters.http_models import RequestParams
from cli import doctor
from cli.ui_components import build_cookies_table, build_document_panel, build_matches_table, print_error
from core.config import LOG_LEVELS, AppSettings
from core.domain.chance import get_random_boolean_with_set_chance
from core.domain.dates import (
    get_all_dates_between_inclusive,
    get_first_of_previous_month,
    get_last_of_previous_month,
    parse_date,
)

app = typer.Typer(no_args_is_help=True, help="utilkit: object, date, chance and HTTP helpers.")
dates_app = typer.Typer(no_args_is_help=True, help="Calendar helpers.")
app.add_typer(dates_app, name="dates")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _parse_pairs(values: list[str] | None, *, option: str) -> dict[str, str] | None:
    """Convierte `["k=v", ...]` en dict; None si no hay valores."""

    if not values:
        return None
    pairs: dict[str, str] = {}
    for raw in values:
        if "=" not in raw:
            raise typer.BadParameter(f"expected key=value, got {raw!r}", param_hint=option)
        key, value = raw.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"empty key in {raw!r}", param_hint=option)
        pairs[key] = value
    return pairs


def _parse_date_arg(value: str, name: str):
    try:
        return parse_date(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=name) from exc


def _print_body(body: object) -> None:
    if isinstance(body, str):
        _console.print(body, markup=False, highlight=False)
    else:
        _console.print_json(json.dumps(body))


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to UTILKIT_LOG_LEVEL.",
    ),
) -> None:
    level = (log_level or AppSettings().log_level).strip().upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    _configure_logging(level)


@dates_app.command("range")
def dates_range(start: str = typer.Argument(...), end: str = typer.Argument(...)) -> None:
    """Print every date from START to END, inclusive."""

    for day in get_all_dates_between_inclusive(_parse_date_arg(start, "START"), _parse_date_arg(end, "END")):
        _console.print(day.isoformat())


@dates_app.command("previous-month")
def dates_previous_month(date: str = typer.Argument(..., help="Reference date (YYYY-MM-DD).")) -> None:
    """Print the first and last day of the month before DATE."""

    value = _parse_date_arg(date, "DATE")
    _console.print(get_first_of_previous_month(value).isoformat())
    _console.print(get_last_of_previous_month(value).isoformat())


@app.command()
def chance(
    percent: float = typer.Argument(..., help="Chance of true, in percent."),
    seed: int | None = typer.Option(None, "--seed", help="Seed for a reproducible draw."),
) -> None:
    """Print true with PERCENT chance, false otherwise."""

    rng = random.Random(seed).random if seed is not None else None
    result = get_random_boolean_with_set_chance(percent, rng=rng)
    _console.print("true" if result else "false")


@app.command("get-json")
def get_json_command(
    url: str = typer.Argument(...),
    query: list[str] | None = typer.Option(None, "--query", "-q", help="Query parameter key=value."),
    header: list[str] | None = typer.Option(None, "--header", "-H", help="Header name=value."),
) -> None:
    """GET URL and print the decoded JSON body."""

    params = RequestParams(
        uri=url,
        qs=_parse_pairs(query, option="--query"),
        headers=_parse_pairs(header, option="--header"),
        json=True,
    )
    try:
        body = asyncio.run(get_json(params))
    except HelperError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc
    _print_body(body)


@app.command("get-document")
def get_document_command(
    url: str = typer.Argument(...),
    select: str | None = typer.Option(None, "--select", "-s", help="CSS selector to extract."),
    cookie: list[str] | None = typer.Option(None, "--cookie", "-c", help="Cookie name=value sent with the request."),
) -> None:
    """GET URL, parse it as HTML and print its metadata and cookies."""

    jar = httpx.Cookies()
    cookies = _parse_pairs(cookie, option="--cookie")
    if cookies:
        try:
            domain = httpx.URL(url).host
        except httpx.InvalidURL as exc:
            raise typer.BadParameter(str(exc), param_hint="URL") from exc
        for name, value in cookies.items():
            jar.set(name, value, domain=domain)

    try:
        result = asyncio.run(get_document(url, jar))
    except HelperError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc

    _console.print(build_document_panel(summarize_document(result.document, base_url=url), url=url))
    if select:
        texts = [node.get_text(" ", strip=True) for node in result.document.select(select)]
        _console.print(build_matches_table(select, texts))
    if result.cookie_jar:
        _console.print(build_cookies_table(result.cookie_jar))


@app.command("post-form")
def post_form_command(
    url: str = typer.Argument(...),
    field: list[str] | None = typer.Option(None, "--field", "-f", help="Form field key=value."),
    header: list[str] | None = typer.Option(None, "--header", "-H", help="Header name=value."),
    follow: bool = typer.Option(False, "--follow", help="Follow redirects after the POST."),
    as_json: bool = typer.Option(False, "--json", help="Decode the response body as JSON."),
) -> None:
    """POST form fields to URL and print the response body."""

    params = RequestParams(
        uri=url,
        form=_parse_pairs(field, option="--field"),
        headers=_parse_pairs(header, option="--header"),
        json=as_json,
        followAllRedirects=follow,
    )
    try:
        body = asyncio.run(post_form(params))
    except HelperError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc
    _print_body(body)


def run() -> None:
    app()
