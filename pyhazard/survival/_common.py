"""
Parameter payloads for nonparametric estimator results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
Output arrays are index-aligned with the event table: position i holds
the value at and including events.time[i].
"""

from __future__ import annotations

from dataclasses import dataclass

from numpy.typing import NDArray

from pyhazard.survival._event_table import EventTable


@dataclass(frozen=True)
class NelsonAalenParams:
    """Nelson-Aalen cumulative hazard parameters.

    Matches R's survival::survfit(..., ctype=1) cumhaz and std.chaz.
    """

    events: EventTable           # grouped event table the fit walked
    chaz: NDArray                # (m,) — H(t) at each event time
    stderr: NDArray              # (m,) — Aalen standard error of H(t)


@dataclass(frozen=True)
class KMParams:
    """Kaplan-Meier survival curve parameters."""

    events: EventTable           # grouped event table the fit walked
    survival: NDArray            # (m,) — S(t) at each event time
    stderr: NDArray              # (m,) — sqrt of Greenwood sum, se of log S(t)
