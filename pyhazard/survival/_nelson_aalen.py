"""
Nelson-Aalen estimator of the cumulative hazard.

Matches R's survival::survfit(Surv(time, event) ~ 1, ctype=1):
- Cumulative hazard: H(t) = Σ_{t_j <= t} d_j / n_j
- Aalen variance: Var(H(t)) = Σ_{t_j <= t} d_j (n_j - d_j) / n_j^3
- Wald confidence intervals: H(t) ± z * se(H(t)), not clipped at zero

References:
    Nelson, W. (1972). Theory and applications of hazard plotting for
        censored failure data. Technometrics, 14(4), 945-966.
    Aalen, O. (1978). Nonparametric inference for a family of counting
        processes. Annals of Statistics, 6(4), 701-726.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyhazard.core.compute.quantile import normal_quantile
from pyhazard.core.validation import check_probability
from pyhazard.survival._accumulate import EstimatorKind


class NelsonAalen(EstimatorKind):
    """Cumulative hazard, H(t) = Σ d_j / n_j."""

    name = "Nelson-Aalen"

    @classmethod
    def estimator_start(cls, value_type: np.dtype) -> np.floating:
        return value_type.type(0)

    @classmethod
    def estimator_update(cls, acc, d, n):
        return acc + d / n

    @classmethod
    def variance_update(cls, acc, d, n):
        # Zero when d == n: everyone left at risk fails together.
        # Factored so no intermediate exceeds n, which keeps float16 finite.
        return acc + (d / n) * ((n - d) / n) / n

    @classmethod
    def confint(cls, estimate: NDArray, stderr: NDArray, level: float) -> NDArray:
        """Symmetric Wald intervals, H(t) ± z * se.

        Lower bounds may be negative; they are reported as computed.
        """
        check_probability(level, "level")
        q = normal_quantile(1.0 - level / 2.0)
        half_width = q * stderr
        return np.column_stack([estimate - half_width, estimate + half_width])
