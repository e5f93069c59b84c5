"""Sell-to-cover for a stock option exercise.

The holder pays the strike price for every exercised share and owes tax on
the spread between FMV and strike. Both are covered by selling exercised
shares at FMV.
"""

import logging

from .money import round_money
from .schemas import OptionInput, OptionResult, StcConfig
from .solver import solve_shares_to_sell
from .taxes import calc_tax_lines

logger = logging.getLogger(__name__)


def calculate(option: OptionInput, config: StcConfig) -> OptionResult:
    """Calculate shares to sell to cover an option exercise.

    The flat fee is folded into the base liability once, before the share
    search; each iteration only adds the commission on top of it.

    Args:
        option: Exercise price, exercised shares, FMV (FMV must be positive)
        config: Tax rates and broker fees

    Returns:
        OptionResult snapshot. Check result.converged for the search outcome.

    Raises:
        InvalidInputError: If price, shares or FMV is not a positive number
    """
    option.require_valid()
    fees = config.broker_fees

    option_cost = round_money(option.exercised_shares * option.exercise_price)
    taxable_gain = round_money((option.fmv - option.exercise_price) * option.exercised_shares)
    taxes = calc_tax_lines(taxable_gain, config.tax_rates)

    base_liability = option_cost + taxes.total + fees.flat_fee
    solution = solve_shares_to_sell(base_liability, option.fmv, fees)

    gross_proceeds = solution.shares * option.fmv
    logger.debug(
        f"exercise {option.exercised_shares:g} @ {option.exercise_price:.2f} "
        f"(fmv {option.fmv:.2f}): sell {solution.shares:.0f}"
    )

    return OptionResult(
        exercise_price=option.exercise_price,
        exercised_shares=option.exercised_shares,
        fmv=option.fmv,
        option_cost=option_cost,
        taxable_gain=taxable_gain,
        **taxes.as_result_fields(),
        broker_commission=solution.commission,
        broker_fees=solution.applied_fee,
        flat_fee=fees.flat_fee,
        total_costs=solution.total_liability,
        shares_to_sell=solution.shares,
        est_gross_proceeds=gross_proceeds,
        residual=gross_proceeds - solution.total_liability,
        net_shares=option.exercised_shares - solution.shares,
        converged=solution.converged,
        iterations=solution.iterations,
    )
