"""
PyHazard: nonparametric survival estimation for Python.

Nelson-Aalen cumulative hazard and Kaplan-Meier survival estimates from
right-censored data, built on one shared accumulation engine, with
pointwise standard errors and confidence intervals.

Submodules:
    core: Result envelope, exceptions, validation, numeric utilities
    survival: Event tables, estimator kinds, fitting and solutions
"""

__version__ = "0.1.0"

from pyhazard import survival
from pyhazard.survival import (
    EventTime,
    KaplanMeier,
    NelsonAalen,
    fit,
    kaplan_meier,
    nelson_aalen,
)

__all__ = [
    "__version__",
    "survival",
    "fit",
    "nelson_aalen",
    "kaplan_meier",
    "NelsonAalen",
    "KaplanMeier",
    "EventTime",
]
