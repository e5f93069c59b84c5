"""Tests for the RSU release sell-to-cover calculation.

Example: 100 shares vest at $50 and sell at $50, default rates.
Taxable gain is the full $5,000 released value.
"""

import math

import pytest

from stccalc.sdk import (
    BrokerFees,
    InvalidInputError,
    RSUInput,
    StcConfig,
    calculate_rsu,
)


@pytest.fixture
def example_release():
    return RSUInput(shares_released=100, vest_price=50.0, sale_price=50.0)


class TestReleaseExample:

    @pytest.fixture
    def result(self, example_release, default_config):
        return calculate_rsu(example_release, default_config)

    def test_full_value_is_taxable(self, result):
        assert result.taxable_gain == 5000.0

    def test_tax_lines(self, result):
        assert result.federal_tax == 1100.0
        assert result.medicare_tax == 72.5
        assert result.social_security_tax == 310.0
        assert result.total_tax == 1482.5

    def test_sell_to_cover(self, result):
        # Seed ceil(1482.50 / 50) = 30, + $25 minimum -> 1507.50 -> 31, holds
        assert result.shares_to_sell == 31
        assert result.broker_commission == 25.0
        assert result.flat_fee == 0.0
        assert result.total_fees == 25.0
        assert result.total_costs == 1507.5
        assert result.net_shares == 69
        assert result.converged

    def test_gross_proceeds_report_shares_kept(self, result):
        assert result.est_gross_proceeds == (100 - 31) * 50.0

    def test_residual_uses_shares_sold(self, result):
        assert result.residual == pytest.approx(31 * 50.0 - 1507.5)
        assert result.residual == pytest.approx(42.5)


class TestReleaseFlatFee:
    """The flat fee is part of every iteration's total."""

    def test_flat_fee_in_total(self, example_release):
        config = StcConfig(broker_fees=BrokerFees(commission_rate=0.03, minimum_fee=25.0, flat_fee=5.0))
        result = calculate_rsu(example_release, config)

        assert result.total_costs == 1512.5
        assert result.total_fees == 30.0
        assert result.shares_to_sell == 31
        assert result.residual == pytest.approx(37.5)

    def test_flat_fee_can_push_share_count_up(self):
        """Tax alone needs 30 shares; fees push the sale to 31 then a larger flat fee to 32."""
        release = RSUInput(shares_released=100, vest_price=50.0, sale_price=50.0)
        config = StcConfig(broker_fees=BrokerFees(commission_rate=0.03, minimum_fee=25.0, flat_fee=45.0))
        result = calculate_rsu(release, config)

        # 1482.50 + 25 + 45 = 1552.50 -> 32 shares
        assert result.shares_to_sell == 32
        assert math.ceil(result.total_costs / 50.0) == 32


class TestReleaseProperties:

    CASES = [
        (100, 50.0, 50.0),
        (37, 212.40, 208.75),
        (1, 10.0, 10.0),
        (5000, 3.21, 3.05),
    ]

    @pytest.mark.parametrize("shares,vest,sale", CASES)
    def test_fixed_point_at_sale_price(self, shares, vest, sale, default_config):
        result = calculate_rsu(RSUInput(shares_released=shares, vest_price=vest, sale_price=sale), default_config)

        assert result.converged
        assert float(result.shares_to_sell).is_integer()
        assert math.ceil(result.total_costs / sale) == result.shares_to_sell

    @pytest.mark.parametrize("shares,vest,sale", CASES)
    def test_net_shares_identity(self, shares, vest, sale, default_config):
        result = calculate_rsu(RSUInput(shares_released=shares, vest_price=vest, sale_price=sale), default_config)
        assert result.net_shares + result.shares_to_sell == shares

    @pytest.mark.parametrize("shares,vest,sale", CASES)
    def test_residual_formula(self, shares, vest, sale, default_config):
        result = calculate_rsu(RSUInput(shares_released=shares, vest_price=vest, sale_price=sale), default_config)
        assert result.residual == result.shares_to_sell * sale - result.total_costs

    def test_single_share_release_cannot_cover_minimum_fee(self, default_config):
        """$10 of stock with a $25 minimum fee: sells more shares than released."""
        result = calculate_rsu(RSUInput(shares_released=1, vest_price=10.0, sale_price=10.0), default_config)

        assert result.shares_to_sell == 3
        assert result.net_shares == -2

    def test_idempotent(self, example_release, default_config):
        assert calculate_rsu(example_release, default_config) == calculate_rsu(example_release, default_config)


class TestReleaseValidation:

    def test_zero_sale_price_rejected(self, default_config):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_rsu(RSUInput(shares_released=100, vest_price=50.0, sale_price=0.0), default_config)
        assert exc_info.value.field == "sale_price"

    def test_negative_shares_rejected(self, default_config):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_rsu(RSUInput(shares_released=-1, vest_price=50.0, sale_price=50.0), default_config)
        assert exc_info.value.field == "shares_released"

    def test_str_reports_residual(self, example_release, default_config):
        text = str(calculate_rsu(example_release, default_config))
        assert text == "STC Result: 31.0000 shares to sell, $42.50 net proceeds, 69.0000 net shares remaining"
