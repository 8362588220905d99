"""CLI commands for pricing quotes."""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

import click

from quoting.application.dto import QuoteDTO, QuoteItemSpec, QuoteSpec
from quoting.domain.exceptions import DomainException
from quoting.domain.model.quote import SummationMode
from quoting.infrastructure.bootstrap import price_quote_handler
from quoting.infrastructure.files.json_quote_file import load_quote_spec


class DecimalParamType(click.ParamType):
    """Parse an option straight to Decimal, never through float."""

    name = "decimal"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            self.fail(f"'{value}' is not a valid number.", param, ctx)
        if not amount.is_finite():
            self.fail(f"'{value}' is not a finite number.", param, ctx)
        return amount


DECIMAL = DecimalParamType()

_OUTPUT_FORMATS = click.Choice(["table", "json"], case_sensitive=False)


def _parse_item(raw: str) -> QuoteItemSpec:
    """Parse 'Tile:2:10.00[:box[:material]]' into a QuoteItemSpec."""
    parts = [part.strip() for part in raw.split(":")]
    if not 3 <= len(parts) <= 5:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'Name:Qty:UnitPrice[:Unit[:Kind]]'."
        )
    name, qty_str, price_str = parts[:3]
    unit = parts[3] if len(parts) > 3 else ""
    kind = parts[4] if len(parts) > 4 else ""

    numbers: list[Decimal] = []
    for label, text in (("quantity", qty_str), ("unit price", price_str)):
        try:
            numbers.append(DECIMAL.convert(text, None, None))
        except click.BadParameter:
            raise click.BadParameter(f"Invalid {label} '{text}' for item '{name}'.")

    qty, unit_price = numbers
    return QuoteItemSpec(name=name, qty=qty, unit_price=unit_price, unit=unit, kind=kind)


def _mode(sum_rounded_items: bool) -> SummationMode | None:
    # None defers to QUOTING_SUMMATION_MODE
    return SummationMode.ROUNDED_ITEMS if sum_rounded_items else None


def _price(spec: QuoteSpec, output: str, sum_rounded_items: bool) -> None:
    handler = price_quote_handler(_mode(sum_rounded_items))

    try:
        dto = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if output.lower() == "json":
        click.echo(json.dumps(dto.to_dict(), indent=2))
    else:
        _display_quote(dto)


def _display_quote(dto: QuoteDTO) -> None:
    """Shared formatting for displaying a priced quote."""
    click.echo(f"Quote  (currency={dto.currency}, summation={dto.summation})")
    if dto.notes:
        click.echo(f"Notes: {dto.notes}")
    click.echo()
    click.echo(f"  {'Item':<20} {'Qty':>8} {'Unit':<6} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.qty:>8} {item.unit:<6} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Labor':<20} {dto.labor_hours:>8} {'h':<6} {dto.labor_rate:>10}")
    click.echo(f"  {'Margin %':<20} {dto.margin_pct:>8}")
    click.echo(f"  {'Tax %':<20} {dto.tax_pct:>8}")
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>30}")
    click.echo(f"  {'Total':<27} {dto.total:>30}")


@click.command("price")
@click.option(
    "--item", "items", multiple=True, required=True,
    help="Line item as 'Name:Qty:UnitPrice[:Unit[:Kind]]'. Repeatable.",
)
@click.option("--labor-hours", type=DECIMAL, default="0", help="Labor hours.")
@click.option("--labor-rate", type=DECIMAL, default="0", help="Labor rate per hour.")
@click.option("--margin", "margin_pct", type=DECIMAL, default="0", help="Margin percentage (0-100).")
@click.option("--tax", "tax_pct", type=DECIMAL, default="0", help="Tax percentage (0-100).")
@click.option("--currency", default="USD", help="3-letter currency code.")
@click.option("--notes", default=None, help="Free-form notes carried into the output.")
@click.option("--format", "output", type=_OUTPUT_FORMATS, default="table", help="Output format.")
@click.option("--sum-rounded-items", is_flag=True, default=False,
              help="Build the subtotal from rounded line totals.")
def quote_price(
    items: tuple[str, ...],
    labor_hours: Decimal,
    labor_rate: Decimal,
    margin_pct: Decimal,
    tax_pct: Decimal,
    currency: str,
    notes: str | None,
    output: str,
    sum_rounded_items: bool,
) -> None:
    """Price a quote given on the command line."""
    spec = QuoteSpec(
        items=[_parse_item(raw) for raw in items],
        labor_hours=labor_hours,
        labor_rate=labor_rate,
        margin_pct=margin_pct,
        tax_pct=tax_pct,
        currency=currency,
        notes=notes,
    )
    _price(spec, output, sum_rounded_items)


@click.command("price-file")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format", "output", type=_OUTPUT_FORMATS, default="table", help="Output format.")
@click.option("--sum-rounded-items", is_flag=True, default=False,
              help="Build the subtotal from rounded line totals.")
def quote_price_file(path: Path, output: str, sum_rounded_items: bool) -> None:
    """Price a quote read from a JSON file."""
    try:
        spec = load_quote_spec(path)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _price(spec, output, sum_rounded_items)
