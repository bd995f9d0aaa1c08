"""
Tolerance tiers for numerical validation.

Defines precision expectations for each accumulation value type:
- FP64 (reference): machine precision match with R
- FP32: relaxed for single-precision arithmetic
- FP16: coarse, only useful for smoke checks

Used by the test suite to compare reduced-precision fits against the
float64 reference.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='double precision — matches R exactly',
)

FP32 = ToleranceTier(
    rtol=1e-5,
    atol=1e-6,
    name='fp32',
    description='single precision — statistically equivalent',
)

FP16 = ToleranceTier(
    rtol=5e-3,
    atol=1e-3,
    name='fp16',
    description='half precision — smoke checks only',
)


def tolerance_for(dtype: DTypeLike) -> ToleranceTier:
    """Pick the tier matching a floating dtype's precision."""
    eps = np.finfo(dtype).eps
    if eps <= np.finfo(np.float64).eps:
        return FP64
    if eps <= np.finfo(np.float32).eps:
        return FP32
    return FP16
