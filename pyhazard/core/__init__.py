"""
Core infrastructure for PyHazard.

This module provides shared abstractions and utilities used by the
estimator modules.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, value-type resolution, normal quantiles
"""

from pyhazard.core.result import Result
from pyhazard.core.exceptions import (
    PyHazardError,
    ValidationError,
    DimensionError,
    MalformedTableError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyHazardError",
    "ValidationError",
    "DimensionError",
    "MalformedTableError",
]
