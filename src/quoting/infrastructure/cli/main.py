import click

from quoting.infrastructure import bootstrap
from quoting.infrastructure.cli.quote_commands import quote_price, quote_price_file
from quoting.infrastructure.logging_config import setup_logging


@click.group()
def cli() -> None:
    """Quoting: exact quote pricing"""
    setup_logging(bootstrap.settings().log_level)


@cli.group()
def quote() -> None:
    """Price quotes."""


# Register subcommands
quote.add_command(quote_price)
quote.add_command(quote_price_file)
