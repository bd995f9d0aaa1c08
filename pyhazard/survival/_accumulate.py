"""
Generic accumulation over a grouped event table.

Every estimator in the Nelson-Aalen / Kaplan-Meier family walks the
distinct event times in order, updates a running estimate and a running
variance, and records both at each step. Only the starting values and the
two per-step formulas differ, so each estimator kind is an EstimatorKind
subclass supplying:

- estimator_start(value_type)      initial estimate
- variance_start(value_type)       initial variance (defaults to estimator_start)
- estimator_update(acc, d, n)      estimate after d events among n at risk
- variance_update(acc, d, n)       variance after the same step

The fold itself lives in accumulate() and is shared by all kinds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pyhazard.core.compute.precision import resolve_value_type
from pyhazard.survival._event_table import EventTable


class EstimatorKind(ABC):
    """Abstract nonparametric estimator kind.

    Kinds are never instantiated; the hooks are classmethods so that a kind
    is passed around as the class itself, e.g. fit(NelsonAalen, ...).
    """

    name: str = ""

    @classmethod
    @abstractmethod
    def estimator_start(cls, value_type: np.dtype) -> np.floating:
        """Estimate before the first event time."""
        ...

    @classmethod
    def variance_start(cls, value_type: np.dtype) -> np.floating:
        """Variance accumulator before the first event time."""
        return cls.estimator_start(value_type)

    @classmethod
    @abstractmethod
    def estimator_update(cls, acc, d, n):
        """Estimate after a step with d events among n at risk."""
        ...

    @classmethod
    @abstractmethod
    def variance_update(cls, acc, d, n):
        """Variance accumulator after a step with d events among n at risk."""
        ...

    @classmethod
    @abstractmethod
    def confint(cls, estimate: NDArray, stderr: NDArray, level: float) -> NDArray:
        """Pointwise (lower, upper) rows for a significance level."""
        ...


def accumulate(
    kind: type[EstimatorKind],
    table: EventTable,
    value_type: DTypeLike = np.float64,
) -> tuple[NDArray, NDArray]:
    """Fold an estimator kind over an event table.

    Parameters
    ----------
    kind : type[EstimatorKind]
        Estimator kind providing the start values and update formulas.
    table : EventTable
        Grouped event table, rows in increasing time order.
    value_type : dtype-like
        Floating type of the accumulators and outputs.

    Returns
    -------
    (estimate, stderr)
        Two (m,) arrays; stderr is the square root of the accumulated
        variance at each step.
    """
    value_type = resolve_value_type(value_type)
    to_value = value_type.type

    m = len(table)
    estimate = np.empty(m, dtype=value_type)
    stderr = np.empty(m, dtype=value_type)

    est_acc = to_value(kind.estimator_start(value_type))
    var_acc = to_value(kind.variance_start(value_type))

    for i in range(m):
        d_i = to_value(table.n_events[i])
        n_i = to_value(table.n_risk[i])
        est_acc = kind.estimator_update(est_acc, d_i, n_i)
        var_acc = kind.variance_update(var_acc, d_i, n_i)
        estimate[i] = est_acc
        stderr[i] = np.sqrt(var_acc)

    return estimate, stderr
