"""Domain errors."""


class DataError(ValueError):
    """Raised when entries or persisted rows are malformed."""


class PhaseValidationError(ValueError):
    """Raised when a diet phase has invalid dates, duration or goal weight."""
