"""Shared fixtures for stc-calc tests."""

import pytest

from stccalc.sdk import BrokerFees, OptionInput, StcConfig, TaxRates


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config directory at an empty temp dir."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("STC_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def default_config():
    """22% federal, FICA, no state/local; $0.03/share with a $25 minimum."""
    return StcConfig(
        tax_rates=TaxRates(federal=0.22, medicare=0.0145, social_security=0.062, state=0.0, local=0.0),
        broker_fees=BrokerFees(commission_rate=0.03, minimum_fee=25.0, flat_fee=0.0),
    )


@pytest.fixture
def example_exercise():
    """100 shares at a $10 strike with a $50 FMV."""
    return OptionInput(exercise_price=10.0, exercised_shares=100, fmv=50.0)
