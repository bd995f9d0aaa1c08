"""
Grouped event table: one row per distinct observed event time.

Each row records the number of subjects at risk just before the time,
the number of events at the time, and the number of subjects censored
before the next event time. Every nonparametric estimator folds over
this table.

Tie convention (matches R's survival::survfit):
- All events at the same time form a single row with d_j > 1
- A subject censored at an event time is still at risk at that time
- Times with only censoring produce no row; they shrink the next risk set
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pyhazard.core.exceptions import MalformedTableError
from pyhazard.core.validation import (
    check_1d,
    check_consistent_length,
    check_time_array,
)


def _readonly(array: NDArray) -> NDArray:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


def _as_counts(values, name: str) -> NDArray:
    arr = np.asarray(values)
    if arr.dtype == object or not np.issubdtype(arr.dtype, np.number):
        raise MalformedTableError(
            f"{name}: expected integer counts, got dtype {arr.dtype}",
            reason="non_integer_counts",
        )
    if arr.size and not np.all(np.isfinite(arr) & (arr == np.round(arr))):
        raise MalformedTableError(
            f"{name}: expected integer counts, got {arr}",
            reason="non_integer_counts",
        )
    return arr.astype(np.int64)


@dataclass(frozen=True)
class EventTable:
    """Immutable grouped event table.

    Construct via build_event_table() or EventTable.from_counts(), not
    directly. All arrays are read-only and index-aligned.

    Attributes
    ----------
    time : NDArray
        (m,) distinct event times, strictly increasing, caller's dtype.
    n_risk : NDArray
        (m,) number at risk just before each time.
    n_events : NDArray
        (m,) events at each time.
    n_censored : NDArray
        (m,) censored at or after each time and before the next event time.
    n_observations : int
        Number of subjects the table was built from.
    """

    time: NDArray
    n_risk: NDArray
    n_events: NDArray
    n_censored: NDArray
    n_observations: int

    @classmethod
    def from_counts(
        cls,
        time,
        n_risk,
        n_events,
        n_censored=None,
        *,
        n_observations: int | None = None,
    ) -> EventTable:
        """Build a table from pre-grouped counts, checking every invariant.

        Parameters
        ----------
        time : array-like
            Distinct event times, strictly increasing.
        n_risk : array-like
            Risk set size just before each time.
        n_events : array-like
            Events at each time.
        n_censored : array-like or None
            Censored in [time[i], time[i+1]). Derived from the risk sets
            when None.
        n_observations : int or None
            Subjects in the underlying sample, at least n_risk[0] (the
            default).

        Returns
        -------
        EventTable

        Raises
        ------
        MalformedTableError
            If the counts cannot come from a right-censored sample.
        """
        time = check_time_array(time, "time")
        n_risk = _as_counts(n_risk, "n_risk")
        n_events = _as_counts(n_events, "n_events")
        for arr, name in ((time, "time"), (n_risk, "n_risk"), (n_events, "n_events")):
            check_1d(arr, name)
        check_consistent_length(
            time, n_risk, n_events, names=("time", "n_risk", "n_events"),
        )

        m = len(time)
        if m > 1:
            steps = np.flatnonzero(~(time[1:] > time[:-1]))
            if len(steps):
                i = int(steps[0]) + 1
                raise MalformedTableError(
                    f"time must be strictly increasing: time[{i}]={time[i]} "
                    f"follows time[{i - 1}]={time[i - 1]}",
                    index=i, reason="unsorted_times",
                )

        for i in range(m):
            if n_risk[i] <= 0:
                raise MalformedTableError(
                    f"row {i}: no subjects at risk at time {time[i]}",
                    index=i, reason="empty_risk_set",
                )
            if n_events[i] <= 0:
                raise MalformedTableError(
                    f"row {i}: event count must be positive, got {n_events[i]}",
                    index=i, reason="no_events",
                )
            if n_events[i] > n_risk[i]:
                raise MalformedTableError(
                    f"row {i}: {n_events[i]} events exceed risk set of "
                    f"{n_risk[i]}",
                    index=i, reason="events_exceed_risk_set",
                )
            if i > 0 and n_risk[i] > n_risk[i - 1]:
                raise MalformedTableError(
                    f"row {i}: risk set grows from {n_risk[i - 1]} to {n_risk[i]}",
                    index=i, reason="risk_set_increases",
                )
            if i > 0 and n_risk[i] > n_risk[i - 1] - n_events[i - 1]:
                raise MalformedTableError(
                    f"row {i}: risk set of {n_risk[i]} still contains the "
                    f"{n_events[i - 1]} subject(s) that failed at "
                    f"time {time[i - 1]}",
                    index=i, reason="risk_set_inconsistent",
                )

        derived = _censored_from_risk_sets(n_risk, n_events)
        if n_censored is None:
            n_censored = derived
        else:
            n_censored = _as_counts(n_censored, "n_censored")
            check_1d(n_censored, "n_censored")
            check_consistent_length(
                time, n_censored, names=("time", "n_censored"),
            )
            mismatch = np.flatnonzero(n_censored != derived)
            if len(mismatch):
                i = int(mismatch[0])
                raise MalformedTableError(
                    f"row {i}: n_censored={n_censored[i]} disagrees with the "
                    f"risk sets, which imply {derived[i]}",
                    index=i, reason="censoring_inconsistent",
                )

        first_risk_set = int(n_risk[0]) if m else 0
        if n_observations is None:
            n_observations = first_risk_set
        elif n_observations < first_risk_set:
            raise MalformedTableError(
                f"n_observations={n_observations} is smaller than the "
                f"{first_risk_set} subject(s) at risk at the first event time",
                index=0, reason="too_few_observations",
            )

        return cls(
            time=_readonly(time),
            n_risk=_readonly(n_risk),
            n_events=_readonly(n_events),
            n_censored=_readonly(n_censored),
            n_observations=int(n_observations),
        )

    def __len__(self) -> int:
        return len(self.time)

    @property
    def n_events_total(self) -> int:
        return int(np.sum(self.n_events))

    @property
    def n_censored_total(self) -> int:
        return self.n_observations - self.n_events_total


def _censored_from_risk_sets(n_risk: NDArray, n_events: NDArray) -> NDArray:
    # n_risk[i+1] = n_risk[i] - n_events[i] - n_censored[i]; the last row
    # absorbs everyone left after the final event time.
    survivors = n_risk - n_events
    if len(n_risk) == 0:
        return survivors
    next_risk = np.append(n_risk[1:], 0)
    return survivors - next_risk


def build_event_table(time: NDArray, event: NDArray) -> EventTable:
    """Group validated per-subject data into an event table.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) boolean event indicator.

    Returns
    -------
    EventTable
    """
    n_total = len(time)

    order = np.argsort(time, kind="stable")
    t_sorted = time[order]
    e_sorted = event[order].astype(np.int64)

    if n_total == 0:
        empty = np.array([], dtype=np.int64)
        return EventTable(
            time=_readonly(t_sorted),
            n_risk=_readonly(empty),
            n_events=_readonly(empty),
            n_censored=_readonly(empty),
            n_observations=0,
        )

    distinct, first = np.unique(t_sorted, return_index=True)

    # Everyone whose time is >= t is at risk just before t
    n_risk_all = n_total - first
    n_events_all = np.add.reduceat(e_sorted, first)

    has_event = n_events_all > 0
    n_risk = n_risk_all[has_event]
    n_events = n_events_all[has_event]

    return EventTable(
        time=_readonly(distinct[has_event]),
        n_risk=_readonly(n_risk),
        n_events=_readonly(n_events),
        n_censored=_readonly(_censored_from_risk_sets(n_risk, n_events)),
        n_observations=n_total,
    )
