"""
Public API for nonparametric survival estimation.

    fit(kind, time, event) → Solution
    fit(kind, records) → Solution
    fit(kind, table) → Solution
    nelson_aalen(time, event) → NelsonAalenSolution
    kaplan_meier(time, event) → KMSolution

Each function validates inputs, builds the grouped event table, folds
the estimator kind over it, and wraps the Result in a Solution.
"""

from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import DTypeLike

from pyhazard.core.compute.precision import resolve_value_type
from pyhazard.core.compute.timing import Timer
from pyhazard.core.exceptions import ValidationError
from pyhazard.core.result import Result
from pyhazard.survival._accumulate import EstimatorKind, accumulate
from pyhazard.survival._common import KMParams, NelsonAalenParams
from pyhazard.survival._event_table import EventTable, build_event_table
from pyhazard.survival._km import KaplanMeier
from pyhazard.survival._nelson_aalen import NelsonAalen
from pyhazard.survival.design import SurvivalDesign
from pyhazard.survival.solution import (
    KMSolution, NelsonAalenSolution, StepFunctionSolution,
)


def _nelson_aalen_solution(result_kwargs, table, estimate, stderr):
    params = NelsonAalenParams(events=table, chaz=estimate, stderr=stderr)
    return NelsonAalenSolution(_result=Result(params=params, **result_kwargs))


def _km_solution(result_kwargs, table, estimate, stderr):
    params = KMParams(events=table, survival=estimate, stderr=stderr)
    return KMSolution(_result=Result(params=params, **result_kwargs))


_SOLUTION_BUILDERS = {
    NelsonAalen: _nelson_aalen_solution,
    KaplanMeier: _km_solution,
}


def _solution_builder(kind):
    if not (isinstance(kind, type) and issubclass(kind, EstimatorKind)):
        raise ValidationError(
            f"kind must be an EstimatorKind subclass, got {kind!r}"
        )
    for base in kind.__mro__:
        if base in _SOLUTION_BUILDERS:
            return _SOLUTION_BUILDERS[base]
    raise ValidationError(
        f"kind: no solution type is registered for {kind.__name__}"
    )


def _event_table(time, event) -> EventTable:
    if isinstance(time, EventTable):
        if event is not None:
            raise ValidationError(
                "event must be omitted when fitting a prebuilt EventTable"
            )
        return time

    if event is None:
        design = SurvivalDesign.from_records(time)
    else:
        design = SurvivalDesign.for_survival(time, event)
    return build_event_table(design.time, design.event)


def fit(
    kind: type[EstimatorKind],
    time,
    event=None,
    *,
    value_type: DTypeLike = np.float64,
) -> StepFunctionSolution:
    """Fit a nonparametric estimator kind to right-censored data.

    Parameters
    ----------
    kind : type[EstimatorKind]
        NelsonAalen, KaplanMeier or a subclass of either.
    time : array-like, iterable of records, or EventTable
        Per-subject times (with ``event``), a sequence of EventTime values
        or (time, status) pairs (without ``event``), or a prebuilt
        EventTable.
    event : array-like or None
        Event indicator (1/True = event, 0/False = censored) when ``time``
        holds raw times.
    value_type : dtype-like
        Floating type of the estimates (default float64). Time values keep
        their own dtype.

    Returns
    -------
    StepFunctionSolution
        NelsonAalenSolution or KMSolution.
    """
    build_solution = _solution_builder(kind)
    value_type = resolve_value_type(value_type)

    timer = Timer()
    timer.start()

    with timer.section('event_table'):
        table = _event_table(time, event)

    with timer.section('accumulate'):
        estimate, stderr = accumulate(kind, table, value_type)

    timer.stop()

    estimate.setflags(write=False)
    stderr.setflags(write=False)

    warnings_list = []
    if len(table) == 0:
        msg = (
            f"No events observed among {table.n_observations} subject(s); "
            f"the {kind.name} estimate is its start value everywhere"
        )
        warnings_list.append(msg)
        warnings.warn(msg, RuntimeWarning, stacklevel=2)

    result_kwargs = dict(
        info={
            "method": kind.name,
            "value_type": str(value_type),
            "n_event_times": len(table),
        },
        timing=timer.result(),
        backend_name="cpu_" + kind.name.lower().replace("-", "_"),
        warnings=tuple(warnings_list),
    )

    return build_solution(result_kwargs, table, estimate, stderr)


def nelson_aalen(
    time,
    event=None,
    *,
    value_type: DTypeLike = np.float64,
) -> NelsonAalenSolution:
    """Nelson-Aalen cumulative hazard estimation.

    Matches R's survival::survfit(Surv(time, event) ~ 1, ctype=1)
    cumhaz and std.chaz.

    Parameters
    ----------
    time : array-like, iterable of records, or EventTable
        See fit().
    event : array-like or None
        Event indicator (1=event, 0=censored).
    value_type : dtype-like
        Floating type of the estimates (default float64).

    Returns
    -------
    NelsonAalenSolution
    """
    return fit(NelsonAalen, time, event, value_type=value_type)


def kaplan_meier(
    time,
    event=None,
    *,
    value_type: DTypeLike = np.float64,
) -> KMSolution:
    """Kaplan-Meier survival curve estimation.

    Matches R's survival::survfit(Surv(time, event) ~ 1,
    conf.type="log-log").

    Parameters
    ----------
    time : array-like, iterable of records, or EventTable
        See fit().
    event : array-like or None
        Event indicator (1=event, 0=censored).
    value_type : dtype-like
        Floating type of the estimates (default float64).

    Returns
    -------
    KMSolution
    """
    return fit(KaplanMeier, time, event, value_type=value_type)
