"""Exception hierarchy for stc-calc.

All calculator exceptions inherit from StcError for easy catching.
"""

from typing import Optional


class StcError(Exception):
    """Base exception for all stc-calc errors."""
    pass


class InvalidInputError(StcError, ValueError):
    """Raised when a required input is non-positive or not a finite number.

    Attributes:
        field: Name of the offending input field
        value: The rejected value
    """

    def __init__(self, field: str, value: float, reason: str = "must be greater than 0"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {value!r} ({reason})")


class CsvImportError(StcError, ValueError):
    """Raised when a CSV import cannot be completed.

    Attributes:
        row: 1-based line number of the offending row (None for header errors)
        field: Name of the field that failed to parse
        value: Raw text of the field
    """

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ):
        self.row = row
        self.field = field
        self.value = value
        full_msg = message
        if field:
            full_msg = f"invalid {field} {value!r}: {message}"
        if row is not None:
            full_msg = f"row {row}: {full_msg}"
        super().__init__(full_msg)


class ConvergenceError(StcError):
    """Raised in strict mode when the share count never settles.

    Attributes:
        last_shares: Share count from the final iteration
        last_liability: Total liability from the final iteration
        iterations: Number of iterations performed
    """

    def __init__(self, last_shares: float, last_liability: float, iterations: int):
        self.last_shares = last_shares
        self.last_liability = last_liability
        self.iterations = iterations
        super().__init__(
            f"Shares to sell did not converge after {iterations} iterations "
            f"(last: {last_shares:.0f} shares, ${last_liability:,.2f} liability)"
        )


class ConfigError(StcError):
    """Raised when profile.yaml cannot be loaded or fails validation."""
    pass
