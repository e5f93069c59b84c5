"""stc-calc SDK - sell-to-cover sizing for option exercises and RSU releases."""

from .money import round_money

from .errors import (
    StcError,
    InvalidInputError,
    CsvImportError,
    ConvergenceError,
    ConfigError,
)

from .schemas import (
    TaxRates,
    BrokerFees,
    StcConfig,
    OptionInput,
    RSUInput,
    OptionResult,
    RSUResult,
    Summary,
    # Short aliases
    Config,
    Input,
    Result,
)

from .solver import (
    ShareSolution,
    solve_shares_to_sell,
    MAX_ITERATIONS,
)

from .options import calculate
from .rsus import calculate_rsu
from .calculator import Calculator

from .batch import (
    run_batch,
    run_rsu_batch,
    summarize,
)

from .tabular import (
    read_inputs_csv,
    write_results_csv,
    EXPORT_HEADER,
)

from .config import (
    get_config_dir,
    get_profile_path,
    load_config,
    save_config,
    get_config_value,
    set_config_value,
    reset_config,
)

__all__ = [
    # Rounding
    "round_money",
    # Errors
    "StcError",
    "InvalidInputError",
    "CsvImportError",
    "ConvergenceError",
    "ConfigError",
    # Schemas
    "TaxRates",
    "BrokerFees",
    "StcConfig",
    "OptionInput",
    "RSUInput",
    "OptionResult",
    "RSUResult",
    "Summary",
    "Config",
    "Input",
    "Result",
    # Solvers
    "ShareSolution",
    "solve_shares_to_sell",
    "MAX_ITERATIONS",
    "calculate",
    "calculate_rsu",
    "Calculator",
    # Batch
    "run_batch",
    "run_rsu_batch",
    "summarize",
    # CSV
    "read_inputs_csv",
    "write_results_csv",
    "EXPORT_HEADER",
    # Config
    "get_config_dir",
    "get_profile_path",
    "load_config",
    "save_config",
    "get_config_value",
    "set_config_value",
    "reset_config",
]
