"""
fundkit command line.

    fundkit schemas
    fundkit validate kyc payload.json
    fundkit query users.json --criteria criteria.json
    fundkit format 1234567.5 --style currency

Results are printed to stdout as JSON; logs go to stderr.
"""
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer

from fundkit.coercion import to_datetime
from fundkit.config.settings import LOG_LEVEL
from fundkit.formatting.numbers import (
    format_currency,
    format_large_number,
    format_number,
    format_percentage,
)
from fundkit.query.collection import InvalidCriteriaError, query
from fundkit.validation.engine import UnknownSchemaError, schema_names, validate

app = typer.Typer(help="Form validation, display formatting and list queries for fund screens.")
logger = logging.getLogger(__name__)

STYLES = ("currency", "number", "percentage", "large")


@app.callback()
def main(
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ERROR)"),  # noqa: B008
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )


def _read_json(path: Path) -> Any:
    if not path.exists():
        typer.echo(f"Error: {path} not found.", err=True)
        raise typer.Exit(code=2)
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: {path} is not valid JSON: {e}", err=True)
        raise typer.Exit(code=2) from e


def _print_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2, default=str))


@app.command("schemas")
def list_schemas() -> None:
    """List registered form schemas."""
    for name in schema_names():
        typer.echo(name)


@app.command("validate")
def validate_payload(
    schema: str = typer.Argument(..., help="Form schema name, e.g. 'kyc'"),  # noqa: B008
    payload_path: Path = typer.Argument(..., help="JSON file with the form payload"),  # noqa: B008
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD) for date rules"),  # noqa: B008
) -> None:
    """Validate a payload. Exit code 1 when it is invalid, 2 for an unknown schema."""
    payload = _read_json(payload_path)
    if not isinstance(payload, dict):
        typer.echo("Error: payload must be a JSON object.", err=True)
        raise typer.Exit(code=2)

    reference: Optional[date] = None
    if today is not None:
        parsed = to_datetime(today)
        if parsed is None:
            typer.echo(f"Error: cannot parse date '{today}'.", err=True)
            raise typer.Exit(code=2)
        reference = parsed.date()

    try:
        result = validate(schema, payload, today=reference)
    except UnknownSchemaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    _print_json(result.to_dict())
    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command("query")
def query_items(
    items_path: Path = typer.Argument(..., help="JSON file with an array of records"),  # noqa: B008
    criteria_path: Optional[Path] = typer.Option(None, "--criteria", help="JSON file with query criteria"),  # noqa: B008
    collection: str = typer.Option("default", help="Collection label for metrics"),  # noqa: B008
) -> None:
    """Filter, sort and paginate records. Exit code 2 for malformed criteria."""
    items = _read_json(items_path)
    if not isinstance(items, list):
        typer.echo("Error: items must be a JSON array.", err=True)
        raise typer.Exit(code=2)
    criteria = _read_json(criteria_path) if criteria_path is not None else None

    try:
        result = query(items, criteria, collection=collection)
    except InvalidCriteriaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    _print_json(result.to_dict())


@app.command("format")
def format_value(
    value: str = typer.Argument(..., help="Number to format"),  # noqa: B008
    style: str = typer.Option("currency", help="currency | number | percentage | large"),  # noqa: B008
    currency: Optional[str] = typer.Option(None, help="ISO currency code"),  # noqa: B008
    locale: Optional[str] = typer.Option(None, help="Locale, e.g. en-IN"),  # noqa: B008
    decimals: int = typer.Option(2, help="Fraction digits"),  # noqa: B008
    compact: bool = typer.Option(False, help="Abbreviate with K / L / Cr"),  # noqa: B008
    symbol: bool = typer.Option(True, "--symbol/--no-symbol", help="Show the currency or percent sign"),  # noqa: B008
) -> None:
    """Format a number for display."""
    if style not in STYLES:
        typer.echo(f"Error: unknown style '{style}', expected one of {', '.join(STYLES)}.", err=True)
        raise typer.Exit(code=2)

    try:
        if style == "currency":
            text = format_currency(
                value, currency=currency, locale=locale, decimals=decimals,
                compact=compact, show_symbol=symbol,
            )
        elif style == "number":
            text = format_number(value, decimals=decimals, compact=compact, locale=locale)
        elif style == "percentage":
            text = format_percentage(value, decimals=decimals, show_symbol=symbol)
        else:
            text = format_large_number(value)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    typer.echo(text)


if __name__ == "__main__":
    app()
