"""
Solution wrappers for nonparametric estimator results.

Each Solution wraps a Result[Params] and exposes user-friendly properties,
step-function evaluation, pointwise confidence intervals and R-style
summary() methods. Solutions hold no mutable state, so one fitted
estimator can be queried from any number of threads.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyhazard.core.result import Result
from pyhazard.survival._accumulate import EstimatorKind
from pyhazard.survival._common import KMParams, NelsonAalenParams
from pyhazard.survival._event_table import EventTable
from pyhazard.survival._km import KaplanMeier
from pyhazard.survival._nelson_aalen import NelsonAalen


def _is_missing(t) -> NDArray[np.bool_]:
    t = np.asarray(t)
    if t.dtype.kind in "Mm":
        return np.isnat(t)
    if t.dtype.kind in "fc":
        return np.isnan(t)
    return np.zeros(t.shape, dtype=bool)


class StepFunctionSolution:
    """Fitted right-continuous step function over the event times.

    Subclasses set ``kind`` and provide ``_estimate``, the stored value at
    each event time.
    """

    __slots__ = ('_result',)

    kind: type[EstimatorKind]
    _estimate_label: str = "estimate"

    def __init__(self, _result: Result) -> None:
        self._result = _result

    @property
    def _estimate(self) -> NDArray:
        raise NotImplementedError

    # -- Properties delegating to the event table --

    @property
    def events(self) -> EventTable:
        """Grouped event table the estimate was accumulated over."""
        return self._result.params.events

    @property
    def time(self):
        """Distinct event times."""
        return self.events.time

    @property
    def n_risk(self):
        """Number at risk just before each event time."""
        return self.events.n_risk

    @property
    def n_events(self):
        """Number of events at each event time."""
        return self.events.n_events

    @property
    def n_censored(self):
        """Number censored from each event time until the next."""
        return self.events.n_censored

    @property
    def n_observations(self) -> int:
        return self.events.n_observations

    @property
    def n_events_total(self) -> int:
        return self.events.n_events_total

    @property
    def stderr(self):
        return self._result.params.stderr

    @property
    def value_type(self) -> np.dtype:
        """Floating type the estimates were accumulated in."""
        return self._estimate.dtype

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # -- Queries --

    def evaluate(self, t):
        """Value of the step function at time(s) t.

        Returns the stored value at the largest event time <= t, or the
        estimator's start value when t precedes every event time. Missing
        queries (NaN or NaT) evaluate to NaN.

        Parameters
        ----------
        t : scalar or array-like
            Query time(s), comparable with the fitted times.

        Returns
        -------
        numpy scalar for scalar t, otherwise an array shaped like t.
        """
        estimate = self._estimate
        start = self.kind.estimator_start(self.value_type)
        missing = _is_missing(t)
        idx = np.searchsorted(self.time, t, side='right') - 1

        if np.ndim(idx) == 0:
            if missing:
                return self.value_type.type(np.nan)
            return estimate[idx] if idx >= 0 else start

        out = np.full(np.shape(idx), start, dtype=self.value_type)
        hit = (idx >= 0) & ~missing
        out[hit] = estimate[idx[hit]]
        out[missing] = np.nan
        return out

    def __call__(self, t):
        return self.evaluate(t)

    def confint(self, level: float = 0.05) -> NDArray:
        """Pointwise confidence intervals at each event time.

        Parameters
        ----------
        level : float
            Significance level; 0.05 gives 95% intervals.

        Returns
        -------
        NDArray
            (m, 2) array of (lower, upper) rows aligned with the estimate.

        Raises
        ------
        ValidationError
            If level is outside (0, 1).
        """
        return self.kind.confint(self._estimate, self.stderr, level)

    def summary(self) -> str:
        """R-style summary of the fitted step function."""
        lines = []
        lines.append(f"Call: {self.kind.name}")
        lines.append("")
        lines.append(
            f"  n={self.n_observations}, "
            f"events={self.n_events_total}"
        )
        lines.append("")

        lines.append(
            f"  {'time':>10s}  {'n.risk':>8s}  {'n.event':>8s}  "
            f"{self._estimate_label:>10s}  {'std.err':>10s}  "
            f"{'lower 95%':>10s}  {'upper 95%':>10s}"
        )

        ci = self.confint(0.05)
        m = len(self.time)
        show = min(m, 20)
        for i in range(show):
            lines.append(
                f"  {str(self.time[i]):>10s}  {self.n_risk[i]:8d}  "
                f"{self.n_events[i]:8d}  "
                f"{self._estimate[i]:10.6f}  {self.stderr[i]:10.6f}  "
                f"{ci[i, 0]:10.6f}  {ci[i, 1]:10.6f}"
            )
        if m > 20:
            lines.append(f"  ... ({m - 20} more rows)")

        return "\n".join(lines)


class NelsonAalenSolution(StepFunctionSolution):
    """Nelson-Aalen cumulative hazard solution.

    Properties mirror R's survfit(..., ctype=1) cumhaz output.
    """

    __slots__ = ()

    kind = NelsonAalen
    _estimate_label = "cumhaz"

    def __init__(self, _result: Result[NelsonAalenParams]) -> None:
        super().__init__(_result)

    @property
    def _estimate(self) -> NDArray:
        return self._result.params.chaz

    @property
    def chaz(self):
        """H(t) at each event time."""
        return self._result.params.chaz

    def __repr__(self) -> str:
        final = self.chaz[-1] if len(self.chaz) else self.kind.estimator_start(self.value_type)
        return (
            f"NelsonAalenSolution(n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"final_chaz={float(final):.4g})"
        )


class KMSolution(StepFunctionSolution):
    """Kaplan-Meier survival curve solution.

    Properties mirror R's survfit() output.
    """

    __slots__ = ()

    kind = KaplanMeier
    _estimate_label = "survival"

    def __init__(self, _result: Result[KMParams]) -> None:
        super().__init__(_result)

    @property
    def _estimate(self) -> NDArray:
        return self._result.params.survival

    @property
    def survival(self):
        """S(t) at each event time."""
        return self._result.params.survival

    @property
    def se(self):
        """Greenwood standard error of S(t) (R's std.err)."""
        return self.survival * self.stderr

    @property
    def median_survival(self) -> float | None:
        """Median survival time (smallest t where S(t) <= 0.5)."""
        if len(self.survival) == 0:
            return None
        idx = self.survival <= 0.5
        if not idx.any():
            return None
        return self.time[idx][0]

    def __repr__(self) -> str:
        return (
            f"KMSolution(n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"median={self.median_survival})"
        )
