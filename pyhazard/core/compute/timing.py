"""
Wall-clock timing for estimator fits.

fit() times the whole call and each pipeline stage (building the event
table, folding the estimator kind over it) and stores the numbers in
Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Total elapsed time plus named stage times, in seconds.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('event_table'):
            table = build_event_table(time, event)
        timer.stop()
        timer.result()  # {'total_seconds': ..., 'event_table': ...}
    """

    def __init__(self):
        self._stages: dict[str, float] = {}
        self._t0: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._t0 = time.perf_counter()

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to stage ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._stages[name] = (
                self._stages.get(name, 0.0) + time.perf_counter() - t0
            )

    def result(self) -> dict[str, float]:
        """Stage times keyed by name, plus 'total_seconds'."""
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._stages}
