"""Custom exceptions for execpay."""


class SimulationError(Exception):
    """Base exception for compensation simulation errors."""


class RegimeConfigError(SimulationError):
    """Raised when a tax regime or one of its bracket tables is malformed."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Invalid tax regime {source}: {message}")


class DataValidationError(SimulationError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class ReportRenderError(SimulationError):
    """Raised when a report cannot be rendered, e.g. text the font cannot encode."""

    def __init__(self, target: str, message: str):
        self.target = target
        super().__init__(f"Cannot render report {target}: {message}")
