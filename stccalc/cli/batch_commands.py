"""Batch CSV commands."""

import io
import json
from pathlib import Path

import click
from rich.console import Console

from stccalc.sdk import (
    Calculator,
    ConvergenceError,
    CsvImportError,
    InvalidInputError,
    read_inputs_csv,
    run_batch,
    summarize,
    write_results_csv,
)

from .overrides import config_overrides, resolve_config
from .renderers.result_renderer import render_summary


@click.group("batch")
def batch():
    """Run sell-to-cover for many option exercises from a CSV file.

    \b
    Input CSV: a header row, then one row per exercise:
      Exercise Price,Exercised Shares,FMV
      10.00,100,50.00
    Only the first three columns are read, so an exported results
    file can be fed back in.
    """
    pass


@batch.command("run")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write results CSV here (default: stdout).")
@click.option("--workers", "-w", type=int, default=None, help="Calculate on N threads.")
@click.option("--strict", is_flag=True, help="Fail if any share count does not converge.")
@click.option("--json", "as_json", is_flag=True, help="Output results and summary as JSON.")
@config_overrides
def batch_run(source, output, workers, strict, as_json, overrides):
    """Calculate every row of SOURCE and export the results.

    \b
    Examples:
      stc-calc batch run grants.csv -o results.csv
      stc-calc batch run grants.csv --workers 4 --json
    """
    try:
        inputs = read_inputs_csv(Path(source))
    except CsvImportError as e:
        raise click.ClickException(f"{source}: {e}")

    calculator = Calculator(resolve_config(overrides), strict=strict)
    try:
        results = run_batch(inputs, calculator, max_workers=workers)
    except InvalidInputError as e:
        raise click.ClickException(f"{source}: {e}")
    except ConvergenceError as e:
        raise click.ClickException(str(e))

    summary = summarize(results)

    if output:
        count = write_results_csv(results, Path(output))

    if as_json:
        output_data = {
            "results": [r.to_dict() for r in results],
            "summary": summary.model_dump(),
        }
        click.echo(json.dumps(output_data, indent=2))
    elif output:
        click.echo(f"Wrote {count} result(s) to {output}")
        render_summary(Console(), summary)
    else:
        buffer = io.StringIO()
        write_results_csv(results, buffer)
        click.echo(buffer.getvalue(), nl=False)

    unconverged = sum(1 for r in results if not r.converged)
    if unconverged:
        click.secho(f"Warning: {unconverged} row(s) did not converge.", fg="yellow", err=True)


@batch.command("summary")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@config_overrides
def batch_summary(source, overrides):
    """Show totals for SOURCE without writing results."""
    try:
        inputs = read_inputs_csv(Path(source))
    except CsvImportError as e:
        raise click.ClickException(f"{source}: {e}")

    try:
        results = run_batch(inputs, Calculator(resolve_config(overrides)))
    except InvalidInputError as e:
        raise click.ClickException(f"{source}: {e}")

    click.echo(str(summarize(results)))
