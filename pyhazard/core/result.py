"""
Generic result container for all PyHazard computations.

The Result class provides a standardized envelope that every estimator
result uses. This enables shared tooling for timing, warnings and
reproducibility while allowing each estimator kind to define its own
parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, value type, sizes)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for nonparametric estimators.
    
    Type Parameters:
        P: The estimator-specific parameter payload type
        
    Attributes:
        params: Estimator-specific payload (event table, estimates, errors)
        info: Structured metadata (method, value type, table size)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the code path that produced this result
        warnings: Non-fatal issues encountered during computation
        
    The frozen=True ensures results are immutable after creation, so the
    same fitted estimator can be queried from many readers at once.
    
    Examples:
        >>> Result(
        ...     params=NelsonAalenParams(events=table, chaz=chaz, stderr=se),
        ...     info={'method': 'Nelson-Aalen', 'value_type': 'float64'},
        ...     timing={'total_seconds': 0.001, 'accumulate': 0.0004},
        ...     backend_name='cpu_nelson_aalen'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    
    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
