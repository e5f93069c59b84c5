"""Rich renderer for sell-to-cover results.

Transforms SDK result records into formatted Rich tables.
"""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from stccalc.sdk import OptionResult, RSUResult, StcConfig, Summary


def render_option_result(console: Console, result: OptionResult) -> None:
    """Render an option exercise result as a Rich table."""
    _render_warnings(console, result)

    table = Table(title="Sell-To-Cover: Option Exercise", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Amount", justify="right", min_width=14)

    table.add_row("[bold]EXERCISE[/bold]", "")
    table.add_row("  Exercise Price", _fmt(result.exercise_price))
    table.add_row("  Exercised Shares", _shares(result.exercised_shares))
    table.add_row("  FMV", _fmt(result.fmv))
    table.add_row("  Option Cost", _fmt(result.option_cost))
    table.add_row("  Taxable Gain", _fmt(result.taxable_gain))
    table.add_row("", "")

    _add_tax_rows(table, result)

    table.add_row("[bold]BROKER FEES[/bold]", "")
    table.add_row("  Commission", _fmt(result.broker_commission))
    table.add_row("  Applied (after minimum)", _fmt(result.broker_fees))
    if result.flat_fee:
        table.add_row("  Flat Fee", _fmt(result.flat_fee))
    table.add_row("", "")

    _add_outcome_rows(table, result)
    console.print(table)


def render_rsu_result(console: Console, result: RSUResult) -> None:
    """Render an RSU release result as a Rich table."""
    _render_warnings(console, result)

    table = Table(title="Sell-To-Cover: RSU Release", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Amount", justify="right", min_width=14)

    table.add_row("[bold]RELEASE[/bold]", "")
    table.add_row("  Shares Released", _shares(result.shares_released))
    table.add_row("  Vest Price", _fmt(result.vest_price))
    table.add_row("  Sale Price", _fmt(result.sale_price))
    table.add_row("  Taxable Gain", _fmt(result.taxable_gain))
    table.add_row("", "")

    _add_tax_rows(table, result)

    table.add_row("[bold]TRANSACTION COSTS[/bold]", "")
    table.add_row("  Commission", _fmt(result.broker_commission))
    table.add_row("  Flat Fee", _fmt(result.flat_fee))
    table.add_row("  [dim]Total Fees[/dim]", f"[dim]{_fmt(result.total_fees)}[/dim]")
    table.add_row("", "")

    _add_outcome_rows(table, result)
    console.print(table)


def render_summary(console: Console, summary: Summary) -> None:
    """Render batch summary statistics."""
    table = Table(title=f"Batch Summary ({summary.count} calculations)", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=24)
    table.add_column("Total", justify="right", min_width=14)

    table.add_row("Exercised Shares", _shares(summary.total_exercised_shares))
    table.add_row("Shares To Sell", _shares(summary.total_shares_to_sell))
    table.add_row("Net Shares", _shares(summary.total_net_shares))
    table.add_row("Total Costs", _fmt(summary.total_costs))
    table.add_row("Total Taxes", _fmt(summary.total_taxes))
    table.add_row("Broker Fees", _fmt(summary.total_broker_fees))
    table.add_row("Average FMV", _fmt(summary.average_fmv))

    console.print(table)


def render_config(console: Console, config: StcConfig, source: str) -> None:
    """Render tax rates and broker fees."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    rates = config.tax_rates
    table.add_row("[bold]Tax rates[/bold]", "")
    table.add_row("  federal", _pct(rates.federal))
    table.add_row("  medicare", _pct(rates.medicare))
    table.add_row("  social_security", _pct(rates.social_security))
    table.add_row("  state", _pct(rates.state))
    table.add_row("  local", _pct(rates.local))

    fees = config.broker_fees
    table.add_row("[bold]Broker fees[/bold]", "")
    table.add_row("  commission_rate", f"{fees.commission_rate:g} / share")
    table.add_row("  minimum_fee", _fmt(fees.minimum_fee))
    table.add_row("  flat_fee", _fmt(fees.flat_fee))

    console.print(Panel(table, title=f"Configuration ({source})", border_style="dim"))


def _render_warnings(console: Console, result) -> None:
    if not result.converged:
        console.print(Panel(
            f"[yellow]Shares to sell did not settle after {result.iterations} iterations; "
            f"figures are from the last iteration.[/yellow]",
            title="Warning",
            border_style="yellow"
        ))


def _add_tax_rows(table: Table, result) -> None:
    table.add_row("[bold]TAXES[/bold]", "")
    table.add_row("  Federal", _fmt(result.federal_tax))
    table.add_row("  Medicare", _fmt(result.medicare_tax))
    table.add_row("  Social Security", _fmt(result.social_security_tax))
    table.add_row("  State", _fmt(result.state_tax))
    table.add_row("  Local / SDI", _fmt(result.local_tax))
    table.add_row("  [dim]Total Tax[/dim]", f"[dim]{_fmt(result.total_tax)}[/dim]")
    table.add_row("", "")


def _add_outcome_rows(table: Table, result) -> None:
    table.add_row("Total Costs", _fmt(result.total_costs))
    table.add_row("Shares Sold to Cover", _shares(result.shares_to_sell))
    table.add_row("Gross Proceeds", _fmt(result.est_gross_proceeds))
    table.add_row("", "")

    # Negative values mean the position cannot cover its own liability
    color = "red" if result.net_shares < 0 else "green"
    table.add_row(
        f"[bold {color}]NET SHARES (TO KEEP)[/bold {color}]",
        f"[bold {color}]{result.net_shares:,.0f}[/bold {color}]",
    )
    color = "red" if result.residual < 0 else "green"
    table.add_row(
        f"[bold {color}]RESIDUAL CASH[/bold {color}]",
        f"[bold {color}]{_fmt(result.residual)}[/bold {color}]",
    )


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def _shares(count: float) -> str:
    return f"{count:,.0f}" if float(count).is_integer() else f"{count:,.4f}"


def _pct(rate: float) -> str:
    return f"{rate * 100:.2f}%"
