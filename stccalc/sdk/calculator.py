"""Calculator bound to a tax/fee configuration.

The configuration may be swapped between calls (update_tax_rates,
update_broker_fees). Each calculation reads one snapshot of it, so a
calculator can be shared across threads.
"""

import logging
import threading
from typing import Iterable, List, Optional, Union

from .errors import ConvergenceError
from .options import calculate
from .rsus import calculate_rsu
from .schemas import BrokerFees, OptionInput, OptionResult, RSUInput, RSUResult, StcConfig, TaxRates

logger = logging.getLogger(__name__)


class Calculator:
    """Sell-to-cover calculator for option exercises and RSU releases.

    Args:
        config: Tax rates and broker fees (defaults to StcConfig.default())
        strict: Raise ConvergenceError instead of returning a result whose
            share count never settled
    """

    def __init__(self, config: Optional[StcConfig] = None, strict: bool = False):
        self._config = config if config is not None else StcConfig.default()
        self._lock = threading.Lock()
        self.strict = strict

    @classmethod
    def default(cls) -> "Calculator":
        return cls(StcConfig.default())

    @property
    def config(self) -> StcConfig:
        """Current configuration snapshot."""
        with self._lock:
            return self._config

    def update_config(self, config: StcConfig) -> None:
        with self._lock:
            self._config = config

    def update_tax_rates(self, rates: TaxRates) -> None:
        with self._lock:
            self._config = self._config.model_copy(update={"tax_rates": rates})

    def update_broker_fees(self, fees: BrokerFees) -> None:
        with self._lock:
            self._config = self._config.model_copy(update={"broker_fees": fees})

    def calculate(self, option: OptionInput) -> OptionResult:
        """Shares to sell for an option exercise under the current config."""
        return self._check(calculate(option, self.config))

    def calculate_rsu(self, release: RSUInput) -> RSUResult:
        """Shares to sell for an RSU release under the current config."""
        return self._check(calculate_rsu(release, self.config))

    def calculate_batch(self, inputs: Iterable[OptionInput], max_workers: Optional[int] = None) -> List[OptionResult]:
        from .batch import run_batch
        return run_batch(inputs, self, max_workers=max_workers)

    def calculate_rsu_batch(self, inputs: Iterable[RSUInput], max_workers: Optional[int] = None) -> List[RSUResult]:
        from .batch import run_rsu_batch
        return run_rsu_batch(inputs, self, max_workers=max_workers)

    def _check(self, result: Union[OptionResult, RSUResult]):
        if not result.converged and self.strict:
            raise ConvergenceError(result.shares_to_sell, result.total_costs, result.iterations)
        return result
