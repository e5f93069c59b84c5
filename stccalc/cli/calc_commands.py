"""Single-event sell-to-cover commands."""

import click
from rich.console import Console

from stccalc.sdk import (
    Calculator,
    ConvergenceError,
    InvalidInputError,
    OptionInput,
    RSUInput,
)

from .overrides import config_overrides, resolve_config
from .renderers.result_renderer import render_option_result, render_rsu_result


def _run(calculate, event):
    try:
        return calculate(event)
    except InvalidInputError as e:
        raise click.BadParameter(f"{e.value!r} ({e.reason})", param_hint=e.field)
    except ConvergenceError as e:
        raise click.ClickException(str(e))


@click.command("exercise")
@click.option("--exercise-price", "-p", type=float, required=True, help="Exercise (strike) price per share.")
@click.option("--shares", "-n", type=float, required=True, help="Number of shares exercised.")
@click.option("--fmv", "-f", type=float, required=True, help="Fair market value per share at exercise.")
@click.option("--strict", is_flag=True, help="Fail if the share count does not converge.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@config_overrides
def exercise(exercise_price, shares, fmv, strict, as_json, overrides):
    """Shares to sell to cover an option exercise.

    Covers the option cost (shares x exercise price), tax on the spread
    and broker commission by selling exercised shares at FMV.

    \b
    Examples:
      stc-calc exercise -p 10 -n 100 -f 50
      stc-calc exercise -p 10 -n 100 -f 50 --state 0.09 --json
    """
    calculator = Calculator(resolve_config(overrides), strict=strict)
    event = OptionInput(exercise_price=exercise_price, exercised_shares=shares, fmv=fmv)
    result = _run(calculator.calculate, event)

    if as_json:
        click.echo(result.to_json())
    else:
        render_option_result(Console(), result)


@click.command("release")
@click.option("--shares", "-n", type=float, required=True, help="Number of shares released.")
@click.option("--vest-price", "-v", type=float, required=True, help="FMV per share at vest (tax basis).")
@click.option("--sale-price", "-s", type=float, help="Estimated sale price per share. Defaults to the vest price.")
@click.option("--strict", is_flag=True, help="Fail if the share count does not converge.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@config_overrides
def release(shares, vest_price, sale_price, strict, as_json, overrides):
    """Shares to sell to cover an RSU release.

    The full released value at the vest price is taxed; shares are sold at
    the sale price to cover tax, commission and the flat fee.

    \b
    Examples:
      stc-calc release -n 200 -v 150
      stc-calc release -n 200 -v 150 -s 148.50 --flat-fee 4.95
    """
    calculator = Calculator(resolve_config(overrides), strict=strict)
    event = RSUInput(
        shares_released=shares,
        vest_price=vest_price,
        sale_price=sale_price if sale_price is not None else vest_price,
    )
    result = _run(calculator.calculate_rsu, event)

    if as_json:
        click.echo(result.to_json())
    else:
        render_rsu_result(Console(), result)
