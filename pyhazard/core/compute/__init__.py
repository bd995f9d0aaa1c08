"""
Shared compute infrastructure for PyHazard.

Submodules:
    timing: Wall-clock timing of fit stages
    precision: Value-type resolution
    tolerances: Comparison tolerance tiers per value type
    quantile: Standard normal quantiles
"""

from pyhazard.core.compute.timing import Timer
from pyhazard.core.compute.precision import resolve_value_type
from pyhazard.core.compute.quantile import normal_quantile

__all__ = [
    # Timing
    "Timer",
    # Precision
    "resolve_value_type",
    # Quantiles
    "normal_quantile",
]
