"""Sell-to-cover for an RSU release.

The whole released value at the vest price is taxable income. Shares are
sold at the estimated sale price to cover the tax plus commission and the
flat processing fee.
"""

import logging

from .money import round_money
from .schemas import RSUInput, RSUResult, StcConfig
from .solver import solve_shares_to_sell
from .taxes import calc_tax_lines

logger = logging.getLogger(__name__)


def calculate_rsu(release: RSUInput, config: StcConfig) -> RSUResult:
    """Calculate shares to sell to cover an RSU release.

    Unlike option exercises, the search is seeded from the tax alone and the
    flat fee is added on every iteration. Gross proceeds report the value of
    the shares kept; residual uses the value of the shares sold.

    Args:
        release: Shares released, vest price, sale price (sale price must be positive)
        config: Tax rates and broker fees

    Returns:
        RSUResult snapshot. Check result.converged for the search outcome.

    Raises:
        InvalidInputError: If shares, vest price or sale price is not a positive number
    """
    release.require_valid()
    fees = config.broker_fees

    taxable_gain = round_money(release.shares_released * release.vest_price)
    taxes = calc_tax_lines(taxable_gain, config.tax_rates)

    solution = solve_shares_to_sell(
        taxes.total, release.sale_price, fees, per_iteration_fee=fees.flat_fee
    )
    shares_to_sell = solution.shares
    logger.debug(
        f"release {release.shares_released:g} @ {release.vest_price:.2f} "
        f"(sale {release.sale_price:.2f}): sell {shares_to_sell:.0f}"
    )

    return RSUResult(
        shares_released=release.shares_released,
        vest_price=release.vest_price,
        sale_price=release.sale_price,
        taxable_gain=taxable_gain,
        **taxes.as_result_fields(),
        broker_commission=solution.applied_fee,
        flat_fee=fees.flat_fee,
        total_fees=solution.applied_fee + fees.flat_fee,
        total_costs=solution.total_liability,
        shares_to_sell=shares_to_sell,
        est_gross_proceeds=(release.shares_released - shares_to_sell) * release.sale_price,
        residual=shares_to_sell * release.sale_price - solution.total_liability,
        net_shares=release.shares_released - shares_to_sell,
        converged=solution.converged,
        iterations=solution.iterations,
    )
