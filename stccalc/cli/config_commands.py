"""Config CLI commands for stc-calc.

Manages profile.yaml - tax rates and broker fee overrides.
"""

import json

import click
from rich.console import Console

from stccalc.sdk import (
    ConfigError,
    get_config_dir,
    get_profile_path,
    load_config,
    reset_config,
    set_config_value,
)

from .renderers.result_renderer import render_config


@click.group()
def config():
    """Manage tax rates and broker fees (profile.yaml).

    \b
    Keys:
      tax_rates.federal, tax_rates.medicare, tax_rates.social_security,
      tax_rates.state, tax_rates.local,
      broker_fees.commission_rate, broker_fees.minimum_fee, broker_fees.flat_fee
    """
    pass


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def config_show(as_json):
    """Show the effective tax rates and broker fees."""
    try:
        current = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(current.model_dump(), indent=2))
        return

    profile_path = get_profile_path()
    source = str(profile_path) if profile_path.exists() else "defaults"
    render_config(Console(), current, source)


@config.command("path")
def config_path():
    """Show configuration paths."""
    profile_path = get_profile_path()
    click.echo(f"Config directory: {get_config_dir()}")
    click.echo(f"Profile: {profile_path}{'' if profile_path.exists() else ' (not found, using defaults)'}")


@config.command("set")
@click.argument("key")
@click.argument("value", type=float)
def config_set(key, value):
    """Set KEY to VALUE in profile.yaml.

    \b
    Examples:
      stc-calc config set tax_rates.state 0.093
      stc-calc config set broker_fees.flat_fee 4.95
    """
    try:
        path = set_config_value(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e))
    click.echo(f"Set {key} = {value:g}")
    click.echo(f"Saved to: {path}")


@config.command("reset")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation.")
def config_reset(force):
    """Delete profile.yaml and go back to the defaults."""
    profile_path = get_profile_path()
    if not profile_path.exists():
        click.echo("No profile to reset (already using defaults).")
        return

    if not force:
        click.confirm(f"Delete {profile_path}?", abort=True)

    reset_config()
    click.echo(click.style("Reset complete. Using defaults.", fg="green"))
