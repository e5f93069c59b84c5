"""stc-calc CLI - sell-to-cover calculations for option exercises and RSU releases."""

import logging
import os

import click

from stccalc import __version__

from .calc_commands import exercise, release
from .batch_commands import batch as batch_group
from .config_commands import config as config_group

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.WARNING),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)


@click.group()
@click.version_option(version=__version__, prog_name="stc-calc")
def cli():
    """stc-calc - how many shares to sell to cover taxes and fees.

    Commands for option exercises, RSU releases and CSV batches.

    Tax rates and broker fees are loaded from (in order):

    \b
    1. Command-line overrides (--federal, --minimum-fee, ...)
    2. profile.yaml in STC_CALC_CONFIG_PATH or ~/.config/stc-calc/
    3. Built-in defaults

    Run 'stc-calc config show' to see the effective values.
    """
    pass


cli.add_command(exercise)
cli.add_command(release)
cli.add_command(batch_group)
cli.add_command(config_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
