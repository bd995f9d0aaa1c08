"""
Kaplan-Meier product-limit estimator.

Matches R's survival::survfit(Surv(time, event) ~ 1, conf.type="log-log"):
- Product-limit survival estimate: S(t) = ∏(1 - d_j / n_j)
- Greenwood sum: G(t) = Σ(d_j / (n_j * (n_j - d_j))), so sqrt(G) is the
  standard error of log S(t)
- Confidence intervals via the log-log transformation

References:
    Kaplan, E. L., & Meier, P. (1958). Nonparametric estimation from
        incomplete observations. JASA, 53(282), 457-481.
    R Core Team. survival::survfit.formula
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyhazard.core.compute.quantile import normal_quantile
from pyhazard.core.validation import check_probability
from pyhazard.survival._accumulate import EstimatorKind


class KaplanMeier(EstimatorKind):
    """Survival function, S(t) = ∏(1 - d_j / n_j)."""

    name = "Kaplan-Meier"

    @classmethod
    def estimator_start(cls, value_type: np.dtype) -> np.floating:
        return value_type.type(1)

    @classmethod
    def variance_start(cls, value_type: np.dtype) -> np.floating:
        return value_type.type(0)

    @classmethod
    def estimator_update(cls, acc, d, n):
        return acc * (1 - d / n)

    @classmethod
    def variance_update(cls, acc, d, n):
        # All at risk fail: S drops to 0 and the Greenwood term is undefined.
        # Contributes nothing, as in the survfit std.err for the last step.
        if d == n:
            return acc
        return acc + (d / n) / (n - d)

    @classmethod
    def confint(cls, estimate: NDArray, stderr: NDArray, level: float) -> NDArray:
        """Log-log intervals, exp(-exp(log(-log S) ∓ z * se / log S)).

        Points where the transform is undefined (S = 0) get (0, 1).
        """
        check_probability(level, "level")
        q = normal_quantile(1.0 - level / 2.0)
        with np.errstate(divide='ignore', invalid='ignore'):
            log_s = np.log(estimate)
            log_neg_log_s = np.log(-log_s)
            shift = q * stderr / log_s
            lower = np.exp(-np.exp(log_neg_log_s - shift))
            upper = np.exp(-np.exp(log_neg_log_s + shift))

        undefined = ~(estimate > 0) | np.isnan(lower) | np.isnan(upper)
        lower = np.where(undefined, 0.0, lower).astype(estimate.dtype)
        upper = np.where(undefined, 1.0, upper).astype(estimate.dtype)
        return np.column_stack([lower, upper])
