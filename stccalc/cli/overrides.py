"""Command-line overrides for tax rates and broker fees."""

import functools
from typing import Optional

import click
from pydantic import ValidationError

from stccalc.sdk import BrokerFees, ConfigError, StcConfig, TaxRates, load_config

# option name -> (config section, field, help)
OVERRIDE_OPTIONS = {
    "federal": ("tax_rates", "federal", "Federal rate (e.g. 0.22)"),
    "medicare": ("tax_rates", "medicare", "Medicare rate (e.g. 0.0145)"),
    "social_security": ("tax_rates", "social_security", "Social Security rate (e.g. 0.062)"),
    "state": ("tax_rates", "state", "State rate (e.g. 0.09)"),
    "local": ("tax_rates", "local", "Local/SDI rate"),
    "commission_rate": ("broker_fees", "commission_rate", "Commission per share sold (e.g. 0.03)"),
    "minimum_fee": ("broker_fees", "minimum_fee", "Minimum commission in dollars"),
    "flat_fee": ("broker_fees", "flat_fee", "Flat processing fee in dollars"),
}


def config_overrides(func):
    """Add --federal, --state, --minimum-fee, etc. and pass `overrides` dict."""
    for name, (_, _, help_text) in reversed(list(OVERRIDE_OPTIONS.items())):
        func = click.option(f"--{name.replace('_', '-')}", name, type=float, default=None, help=help_text)(func)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        kwargs["overrides"] = {name: kwargs.pop(name) for name in OVERRIDE_OPTIONS}
        return func(*args, **kwargs)

    return wrapper


def resolve_config(overrides: Optional[dict] = None) -> StcConfig:
    """Effective config from profile.yaml with command-line overrides applied."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e))

    updates = {"tax_rates": {}, "broker_fees": {}}
    for name, value in (overrides or {}).items():
        if value is not None:
            section, field, _ = OVERRIDE_OPTIONS[name]
            updates[section][field] = value

    try:
        return StcConfig(
            tax_rates=TaxRates.model_validate({**config.tax_rates.model_dump(), **updates["tax_rates"]}),
            broker_fees=BrokerFees.model_validate({**config.broker_fees.model_dump(), **updates["broker_fees"]}),
        )
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "override"
        raise click.BadParameter(error["msg"], param_hint=f"--{field.replace('_', '-')}")
