"""
SurvivalDesign: immutable container for right-censored time-to-event data.

Wraps per-subject times and event indicators. Validates inputs at
construction time — all downstream code trusts clean data.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyhazard.core.exceptions import ValidationError
from pyhazard.core.validation import (
    check_1d,
    check_consistent_length,
    check_event_array,
    check_finite,
    check_non_negative,
    check_time_array,
)


@dataclass(frozen=True)
class EventTime:
    """A single subject's observation.

    Parameters
    ----------
    time : Any
        Time of the event or of censoring.
    status : bool
        True if the event was observed, False if the time is right censored.
    """

    time: Any
    status: bool = True

    @property
    def is_censored(self) -> bool:
        return not self.status


@dataclass(frozen=True)
class SurvivalDesign:
    """Immutable survival data container.

    Parameters
    ----------
    time : NDArray
        Time to event or censoring, in the caller's dtype.
    event : NDArray
        Boolean event indicator: True = event observed, False = censored.
    """

    time: NDArray
    event: NDArray

    @classmethod
    def for_survival(cls, time, event) -> SurvivalDesign:
        """Create and validate survival data.

        Parameters
        ----------
        time : array-like
            Time to event or censoring. Numeric times must be non-negative
            and finite; datetime64 and timedelta64 must not contain NaT.
        event : array-like
            Event indicator (0/1 or bool).

        Returns
        -------
        SurvivalDesign

        Raises
        ------
        ValidationError
            If inputs are invalid.
        DimensionError
            If inputs are not 1D or have different lengths.
        """
        time = check_time_array(time, "time")
        event = check_event_array(event, "event")

        check_1d(time, "time")
        check_1d(event, "event")
        check_consistent_length(time, event, names=("time", "event"))
        check_finite(time, "time")
        check_non_negative(time, "time")

        return cls(time=time, event=event)

    @classmethod
    def from_records(cls, records: Iterable) -> SurvivalDesign:
        """Create survival data from per-subject records.

        Parameters
        ----------
        records : iterable
            EventTime values or (time, status) pairs.

        Returns
        -------
        SurvivalDesign
        """
        times = []
        statuses = []
        for i, record in enumerate(records):
            if isinstance(record, EventTime):
                t, s = record.time, record.status
            else:
                try:
                    t, s = record
                except (TypeError, ValueError) as e:
                    raise ValidationError(
                        f"records[{i}]: expected EventTime or (time, status) "
                        f"pair, got {record!r}"
                    ) from e
            times.append(t)
            statuses.append(s)

        return cls.for_survival(times, statuses)

    @property
    def n(self) -> int:
        """Number of observations."""
        return len(self.time)

    @property
    def n_events(self) -> int:
        """Number of observed events."""
        return int(np.sum(self.event))
