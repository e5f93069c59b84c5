"""Pydantic schemas for stc-calc configuration, inputs and results.

All schemas use extra='forbid' to reject unknown fields, ensuring typos in
profile.yaml cause clear errors rather than silent ignoring. Every model
is frozen: a result is a snapshot and never changes after it is returned.
"""

import json
import math
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidInputError


def require_positive(**values: float) -> None:
    """Raise InvalidInputError for the first value that is not a positive finite number."""
    for field, value in values.items():
        if not math.isfinite(value):
            raise InvalidInputError(field, value, "must be a finite number")
        if value <= 0:
            raise InvalidInputError(field, value)


# =============================================================================
# Configuration
# =============================================================================


class TaxRates(BaseModel):
    """Tax rates applied to taxable gain, as decimals (0.22 = 22%).

    The rates are independent; nothing requires them to sum below 1.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    federal: float = Field(default=0.22, allow_inf_nan=False, description="Federal withholding rate")
    medicare: float = Field(default=0.0145, allow_inf_nan=False, description="Medicare rate")
    social_security: float = Field(default=0.062, allow_inf_nan=False, description="Social Security rate")
    state: float = Field(default=0.0, allow_inf_nan=False, description="State rate")
    local: float = Field(default=0.0, allow_inf_nan=False, description="Local / SDI rate")


class BrokerFees(BaseModel):
    """Broker fee schedule for the sell-to-cover sale.

    commission_rate is charged per share sold (rate x shares), not as a
    fraction of the dollar value of the sale.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    commission_rate: float = Field(default=0.03, allow_inf_nan=False, description="Commission per share sold")
    minimum_fee: float = Field(default=25.0, allow_inf_nan=False, description="Minimum commission per sale")
    flat_fee: float = Field(default=0.0, allow_inf_nan=False, description="Flat payment processing fee")


class StcConfig(BaseModel):
    """Tax rates and broker fees used for one calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_rates: TaxRates = Field(default_factory=TaxRates)
    broker_fees: BrokerFees = Field(default_factory=BrokerFees)

    @classmethod
    def default(cls) -> "StcConfig":
        """Default rates: 22% federal, FICA, no state/local, $0.03/share with $25 minimum."""
        return cls()


# =============================================================================
# Inputs
# =============================================================================


class OptionInput(BaseModel):
    """Option exercise: strike price, shares exercised, FMV at exercise."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    exercise_price: float = Field(..., description="Exercise (strike) price per share")
    exercised_shares: float = Field(..., description="Number of shares exercised")
    fmv: float = Field(..., description="Fair market value per share at exercise")

    def require_valid(self) -> None:
        """Price, shares and FMV must all be greater than 0."""
        require_positive(
            exercise_price=self.exercise_price,
            exercised_shares=self.exercised_shares,
            fmv=self.fmv,
        )


class RSUInput(BaseModel):
    """RSU release: shares released, FMV at vest, expected sale price."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    shares_released: float = Field(..., description="Number of shares released")
    vest_price: float = Field(..., description="FMV per share at vest (tax basis)")
    sale_price: float = Field(..., description="Estimated sale price per share")

    def require_valid(self) -> None:
        require_positive(
            shares_released=self.shares_released,
            vest_price=self.vest_price,
            sale_price=self.sale_price,
        )


# =============================================================================
# Results
# =============================================================================


class _ResultBase(BaseModel):
    """Serialization helpers shared by result records."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Labeled field values, numbers left as floats."""
        return self.model_dump()

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        return (
            f"STC Result: {self.shares_to_sell:.4f} shares to sell, "
            f"${self.residual:.2f} net proceeds, "
            f"{self.net_shares:.4f} net shares remaining"
        )


class OptionResult(_ResultBase):
    """Every intermediate and final quantity of an option exercise calculation.

    residual and net_shares can be negative: the position cannot cover its
    own liability. That is reported, not corrected.
    """

    # Inputs
    exercise_price: float
    exercised_shares: float
    fmv: float

    # Costs and taxes
    option_cost: float = Field(..., description="Cost basis: shares x exercise price")
    taxable_gain: float = Field(..., description="Spread: shares x (FMV - exercise price)")
    federal_tax: float
    medicare_tax: float
    social_security_tax: float
    state_tax: float
    local_tax: float
    total_tax: float = Field(..., description="Sum of the rounded tax lines")

    # Broker fees
    broker_commission: float = Field(..., description="Per-share commission before the minimum")
    broker_fees: float = Field(..., description="Commission after the minimum fee floor")
    flat_fee: float = Field(default=0.0, description="Flat processing fee, folded into the base liability")

    # Sell-to-cover
    total_costs: float
    shares_to_sell: float
    est_gross_proceeds: float
    residual: float = Field(..., description="Gross proceeds minus total costs")
    net_shares: float = Field(..., description="Exercised shares minus shares sold")

    # Solver
    converged: bool = True
    iterations: int = 0


class RSUResult(_ResultBase):
    """Every intermediate and final quantity of an RSU release calculation."""

    # Inputs
    shares_released: float
    vest_price: float
    sale_price: float

    # Taxes
    taxable_gain: float = Field(..., description="Released value: shares x vest price")
    federal_tax: float
    medicare_tax: float
    social_security_tax: float
    state_tax: float
    local_tax: float
    total_tax: float

    # Transaction costs
    broker_commission: float = Field(..., description="Commission after the minimum fee floor")
    flat_fee: float
    total_fees: float = Field(..., description="Commission plus flat fee")

    # Sell-to-cover
    total_costs: float
    shares_to_sell: float
    est_gross_proceeds: float = Field(..., description="Value of shares kept, at the sale price")
    residual: float = Field(..., description="shares_to_sell x sale price minus total costs")
    net_shares: float

    # Solver
    converged: bool = True
    iterations: int = 0


class Summary(BaseModel):
    """Aggregate statistics over a batch of option results."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    count: int = 0
    total_exercised_shares: float = 0.0
    total_shares_to_sell: float = 0.0
    total_net_shares: float = 0.0
    total_costs: float = 0.0
    total_taxes: float = 0.0
    total_broker_fees: float = 0.0
    average_fmv: float = 0.0

    def __str__(self) -> str:
        return (
            f"Batch Summary ({self.count} calculations):\n"
            f"  Total Exercised Shares: {self.total_exercised_shares:.2f}\n"
            f"  Total Shares To Sell:   {self.total_shares_to_sell:.2f}\n"
            f"  Total Net Shares:       {self.total_net_shares:.2f}\n"
            f"  Total Costs:            ${self.total_costs:.2f}\n"
            f"  Total Taxes:            ${self.total_taxes:.2f}\n"
            f"  Total Broker Fees:      ${self.total_broker_fees:.2f}\n"
            f"  Average FMV:            ${self.average_fmv:.2f}"
        )


# Short names matching the calculator vocabulary
Config = StcConfig
Input = OptionInput
Result = OptionResult
