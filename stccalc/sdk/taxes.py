"""Per-line tax amounts on a taxable gain.

Each line is rounded to the cent on its own and the total is the sum of
the rounded lines, the way withholding appears on a release statement.
"""

from typing import Dict, NamedTuple

from .money import round_money
from .schemas import TaxRates


class TaxLines(NamedTuple):
    federal: float
    medicare: float
    social_security: float
    state: float
    local: float

    @property
    def total(self) -> float:
        return self.federal + self.medicare + self.social_security + self.state + self.local

    def as_result_fields(self) -> Dict[str, float]:
        """Field names used by OptionResult and RSUResult."""
        return {
            "federal_tax": self.federal,
            "medicare_tax": self.medicare,
            "social_security_tax": self.social_security,
            "state_tax": self.state,
            "local_tax": self.local,
            "total_tax": self.total,
        }


def calc_tax_lines(taxable_gain: float, rates: TaxRates) -> TaxLines:
    """Apply each rate to the gain. A negative gain gives negative lines."""
    return TaxLines(
        federal=round_money(taxable_gain * rates.federal),
        medicare=round_money(taxable_gain * rates.medicare),
        social_security=round_money(taxable_gain * rates.social_security),
        state=round_money(taxable_gain * rates.state),
        local=round_money(taxable_gain * rates.local),
    )
