"""CSV import of option inputs and export of batch results.

Import format: one header row, then one row per exercise with the first
three columns exercise price, exercised shares, FMV. Extra columns are
ignored, so an exported results file can be read back as inputs.
"""

import csv
import logging
from pathlib import Path
from typing import IO, Iterable, List, Union

from .errors import CsvImportError
from .schemas import OptionInput, OptionResult

logger = logging.getLogger(__name__)

PathOrStream = Union[str, Path, IO[str]]

EXPORT_HEADER = [
    "Exercise Price",
    "Exercised Shares",
    "FMV",
    "Shares To Sell",
    "Net Shares",
    "Total Costs",
    "Est. Gross Proceeds",
    "Taxable Gain",
    "Total Tax",
    "Option Cost",
    "Broker Fees",
]

# (field name, label used in error messages)
IMPORT_FIELDS = [
    ("exercise_price", "exercise price"),
    ("exercised_shares", "exercised shares"),
    ("fmv", "FMV"),
]


def _parse_float(text: str, row: int, label: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise CsvImportError("not a number", row=row, field=label, value=text) from None


def _read_inputs(stream: IO[str]) -> List[OptionInput]:
    reader = csv.reader(stream)

    try:
        next(reader)
    except StopIteration:
        raise CsvImportError("failed to read header: file is empty") from None
    except csv.Error as e:
        raise CsvImportError(f"failed to read header: {e}") from e

    inputs = []
    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            raise CsvImportError(f"failed to read row: {e}", row=reader.line_num) from e

        if len(record) < len(IMPORT_FIELDS):
            logger.warning(f"Skipping row {reader.line_num}: expected at least 3 fields, got {len(record)}")
            continue

        values = {
            name: _parse_float(text, reader.line_num, label)
            for (name, label), text in zip(IMPORT_FIELDS, record)
        }
        inputs.append(OptionInput(**values))

    return inputs


def read_inputs_csv(source: PathOrStream) -> List[OptionInput]:
    """Read option inputs from a CSV file or text stream.

    Rows with fewer than three fields are skipped. The first field that is
    not a number aborts the import; no partial result is returned.

    Args:
        source: Path to a CSV file, or an open text stream

    Returns:
        List of OptionInput in file order

    Raises:
        CsvImportError: Missing header or unparseable field (row and field identified)
    """
    if isinstance(source, (str, Path)):
        with open(source, newline="") as f:
            return _read_inputs(f)
    return _read_inputs(source)


def result_to_row(result: OptionResult) -> List[str]:
    """Export row: money at 2 decimals, share counts at 4."""
    return [
        f"{result.exercise_price:.2f}",
        f"{result.exercised_shares:.4f}",
        f"{result.fmv:.2f}",
        f"{result.shares_to_sell:.4f}",
        f"{result.net_shares:.4f}",
        f"{result.total_costs:.2f}",
        f"{result.est_gross_proceeds:.2f}",
        f"{result.taxable_gain:.2f}",
        f"{result.total_tax:.2f}",
        f"{result.option_cost:.2f}",
        f"{result.broker_fees:.2f}",
    ]


def _write_results(results: Iterable[OptionResult], stream: IO[str]) -> int:
    writer = csv.writer(stream)
    writer.writerow(EXPORT_HEADER)
    count = 0
    for result in results:
        writer.writerow(result_to_row(result))
        count += 1
    return count


def write_results_csv(results: Iterable[OptionResult], dest: PathOrStream) -> int:
    """Write batch results as CSV.

    Args:
        results: Option results to export
        dest: Output path, or an open text stream

    Returns:
        Number of data rows written
    """
    if isinstance(dest, (str, Path)):
        with open(dest, "w", newline="") as f:
            return _write_results(results, f)
    return _write_results(results, dest)
