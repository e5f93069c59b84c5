"""Fixed-point search for the number of whole shares to sell.

Selling n shares costs a commission that depends on n, and the minimum fee
floor makes that cost jump. The solver starts from the share count that
covers the base liability alone and re-sizes until the count that covers
liability-plus-fees is the count it started the iteration with.

Used by both the option exercise and RSU release calculations.
"""

import logging
import math
from dataclasses import dataclass

from .errors import InvalidInputError
from .schemas import BrokerFees

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100


@dataclass(frozen=True)
class ShareSolution:
    """Outcome of the share count search.

    When converged is False the fields hold the values of the last
    iteration, which may not satisfy the fixed point.
    """

    shares: float
    commission: float  # rate x shares, before the minimum
    applied_fee: float  # after the minimum fee floor
    total_liability: float
    iterations: int
    converged: bool


def commission_for(shares: float, fees: BrokerFees) -> tuple:
    """Return (raw commission, commission with the minimum fee applied)."""
    commission = shares * fees.commission_rate
    return commission, max(commission, fees.minimum_fee)


def solve_shares_to_sell(
    base_liability: float,
    price: float,
    fees: BrokerFees,
    per_iteration_fee: float = 0.0,
    max_iterations: int = MAX_ITERATIONS,
) -> ShareSolution:
    """Find the whole share count whose sale covers liability plus fees.

    Args:
        base_liability: Cash owed before any commission (seeds the search)
        price: Sale price per share (must be positive)
        fees: Broker fee schedule
        per_iteration_fee: Extra cost added to every iteration's total,
            e.g. a flat fee that is not part of base_liability
        max_iterations: Iteration cap

    Returns:
        ShareSolution; converged is False if the cap was reached.
    """
    if not price > 0 or not math.isfinite(price):
        raise InvalidInputError("price", price)
    if not math.isfinite(base_liability):
        raise InvalidInputError("base_liability", base_liability, "must be a finite number")

    shares = float(math.ceil(base_liability / price))

    evaluated = shares
    commission = applied_fee = total_liability = 0.0
    for iteration in range(1, max_iterations + 1):
        commission, applied_fee = commission_for(shares, fees)
        total_liability = base_liability + (applied_fee + per_iteration_fee)
        if not math.isfinite(total_liability):
            raise InvalidInputError("total_liability", total_liability, "must be a finite number")
        new_shares = float(math.ceil(total_liability / price))

        logger.debug(
            f"iteration {iteration}: shares={shares:.0f} fee={applied_fee:.2f} "
            f"liability={total_liability:.2f} -> {new_shares:.0f}"
        )

        if new_shares == shares:
            return ShareSolution(
                shares=shares,
                commission=commission,
                applied_fee=applied_fee,
                total_liability=total_liability,
                iterations=iteration,
                converged=True,
            )
        evaluated = shares
        shares = new_shares

    logger.warning(
        f"Share count did not converge after {max_iterations} iterations "
        f"(last: {evaluated:.0f} shares, liability {total_liability:.2f})"
    )
    return ShareSolution(
        shares=evaluated,
        commission=commission,
        applied_fee=applied_fee,
        total_liability=total_liability,
        iterations=max_iterations,
        converged=False,
    )
