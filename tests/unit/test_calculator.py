"""Tests for the Calculator and its bound configuration."""

import threading

import pytest

from stccalc.sdk import (
    BrokerFees,
    Calculator,
    ConvergenceError,
    OptionInput,
    RSUInput,
    StcConfig,
    TaxRates,
    calculate,
)


class TestCalculatorConfig:

    def test_default_config(self):
        calculator = Calculator()
        assert calculator.config == StcConfig.default()
        assert calculator.config.tax_rates.federal == 0.22
        assert calculator.config.broker_fees.minimum_fee == 25.0

    def test_matches_module_function(self, example_exercise, default_config):
        assert Calculator(default_config).calculate(example_exercise) == calculate(example_exercise, default_config)

    def test_update_tax_rates_applies_to_next_call(self, example_exercise):
        calculator = Calculator.default()
        before = calculator.calculate(example_exercise)

        calculator.update_tax_rates(TaxRates(federal=0.22, medicare=0.0145, social_security=0.062, state=0.1))
        after = calculator.calculate(example_exercise)

        assert before.state_tax == 0.0
        assert after.state_tax == 400.0
        assert after.shares_to_sell > before.shares_to_sell

    def test_update_broker_fees_keeps_tax_rates(self):
        calculator = Calculator(StcConfig(tax_rates=TaxRates(state=0.05)))
        calculator.update_broker_fees(BrokerFees(commission_rate=0.01, minimum_fee=0.0, flat_fee=1.0))

        assert calculator.config.tax_rates.state == 0.05
        assert calculator.config.broker_fees.flat_fee == 1.0

    def test_config_snapshot_is_immutable(self):
        calculator = Calculator.default()
        snapshot = calculator.config
        calculator.update_tax_rates(TaxRates(federal=0.37))

        assert snapshot.tax_rates.federal == 0.22
        assert calculator.config.tax_rates.federal == 0.37

    def test_concurrent_updates_and_calculations(self, example_exercise):
        """Every result matches one of the two configurations, never a mix."""
        low = StcConfig(tax_rates=TaxRates(federal=0.10))
        high = StcConfig(tax_rates=TaxRates(federal=0.37))
        expected = {calculate(example_exercise, low), calculate(example_exercise, high)}

        calculator = Calculator(low)
        results = []

        def flip():
            for i in range(200):
                calculator.update_config(high if i % 2 else low)

        def run():
            for _ in range(200):
                results.append(calculator.calculate(example_exercise))

        threads = [threading.Thread(target=flip), threading.Thread(target=run)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 200
        assert all(r in expected for r in results)


class TestStrictMode:

    DIVERGING = StcConfig(broker_fees=BrokerFees(commission_rate=100.0, minimum_fee=0.0))

    def test_lenient_returns_flagged_result(self, example_exercise):
        result = Calculator(self.DIVERGING).calculate(example_exercise)
        assert result.converged is False

    def test_strict_raises(self, example_exercise):
        with pytest.raises(ConvergenceError) as exc_info:
            Calculator(self.DIVERGING, strict=True).calculate(example_exercise)

        assert exc_info.value.iterations == 100
        assert exc_info.value.last_shares > 0

    def test_strict_raises_for_rsu(self):
        release = RSUInput(shares_released=100, vest_price=50.0, sale_price=50.0)
        with pytest.raises(ConvergenceError):
            Calculator(self.DIVERGING, strict=True).calculate_rsu(release)

    def test_strict_passes_converged_results(self, example_exercise):
        result = Calculator(strict=True).calculate(example_exercise)
        assert result.shares_to_sell == 45
