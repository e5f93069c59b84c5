"""Batch calculations and cross-batch summary statistics.

Each input is calculated independently against one configuration snapshot,
so a batch can run on a thread pool without changing its results. Output
order always matches input order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from .calculator import Calculator
from .schemas import OptionInput, OptionResult, RSUInput, RSUResult, Summary

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _map_in_order(func: Callable[[T], R], items: Sequence[T], max_workers: Optional[int]) -> List[R]:
    if not max_workers or max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(func, items))


def _snapshot(calculator: Calculator) -> Calculator:
    """Copy of the calculator pinned to its current config."""
    return Calculator(calculator.config, strict=calculator.strict)


def run_batch(
    inputs: Iterable[OptionInput],
    calculator: Calculator,
    max_workers: Optional[int] = None,
) -> List[OptionResult]:
    """Calculate every option exercise in order.

    Args:
        inputs: Option inputs
        calculator: Calculator whose current config applies to the whole batch
        max_workers: Thread pool size; None or 1 runs sequentially

    Returns:
        One OptionResult per input, in input order
    """
    items = list(inputs)
    pinned = _snapshot(calculator)
    logger.debug(f"running batch of {len(items)} option exercises")
    return _map_in_order(pinned.calculate, items, max_workers)


def run_rsu_batch(
    inputs: Iterable[RSUInput],
    calculator: Calculator,
    max_workers: Optional[int] = None,
) -> List[RSUResult]:
    """Calculate every RSU release in order. See run_batch."""
    items = list(inputs)
    pinned = _snapshot(calculator)
    logger.debug(f"running batch of {len(items)} RSU releases")
    return _map_in_order(pinned.calculate_rsu, items, max_workers)


def summarize(results: Iterable[OptionResult]) -> Summary:
    """Sum shares, costs, taxes and fees across a batch; average the FMV.

    An empty batch gives an all-zero Summary with count 0.
    """
    results = list(results)
    if not results:
        return Summary()

    count = len(results)
    return Summary(
        count=count,
        total_exercised_shares=sum(r.exercised_shares for r in results),
        total_shares_to_sell=sum(r.shares_to_sell for r in results),
        total_net_shares=sum(r.net_shares for r in results),
        total_costs=sum(r.total_costs for r in results),
        total_taxes=sum(r.total_tax for r in results),
        total_broker_fees=sum(r.broker_fees for r in results),
        average_fmv=sum(r.fmv for r in results) / count,
    )
