"""
Exception hierarchy for PyHazard.

All exceptions inherit from PyHazardError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyHazardError(Exception):
    """Base exception for all PyHazard errors."""
    pass


class ValidationError(PyHazardError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.
    
    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class MalformedTableError(ValidationError):
    """
    Grouped event table violates its invariants.
    
    Raised at table construction time when event times are not strictly
    increasing, a risk set is empty, an event count is not positive, more
    events than subjects at risk are recorded, or the risk set grows.
    
    Attributes:
        index: Row of the table where the violation was found
        reason: Short machine-friendly description (e.g. 'empty_risk_set')
    """
    
    def __init__(
        self,
        message: str,
        index: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.reason = reason
