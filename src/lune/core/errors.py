class LuneError(Exception):
    """Base error."""

class InvalidArgumentError(LuneError, TypeError):
    """Raised when a value of the wrong kind is passed where an instant or phase selector is required."""

class OutOfRangeError(LuneError, ValueError):
    """Raised when an instant is not finite or cannot be represented as a datetime."""

class NonConvergenceError(LuneError, RuntimeError):
    """Raised when an iterative solve exceeds its iteration cap (indicates a formula or constant defect)."""
