"""
Nonparametric survival estimation.

Public API:
    fit(kind, ...) -> NelsonAalenSolution | KMSolution
    nelson_aalen(...) -> NelsonAalenSolution
    kaplan_meier(...) -> KMSolution
"""

from pyhazard.survival._accumulate import EstimatorKind, accumulate
from pyhazard.survival._event_table import EventTable, build_event_table
from pyhazard.survival._km import KaplanMeier
from pyhazard.survival._nelson_aalen import NelsonAalen
from pyhazard.survival.design import EventTime, SurvivalDesign
from pyhazard.survival.solution import (
    KMSolution,
    NelsonAalenSolution,
    StepFunctionSolution,
)
from pyhazard.survival.solvers import fit, kaplan_meier, nelson_aalen

__all__ = [
    "fit",
    "nelson_aalen",
    "kaplan_meier",
    "EstimatorKind",
    "NelsonAalen",
    "KaplanMeier",
    "accumulate",
    "EventTable",
    "EventTime",
    "build_event_table",
    "SurvivalDesign",
    "StepFunctionSolution",
    "NelsonAalenSolution",
    "KMSolution",
]
