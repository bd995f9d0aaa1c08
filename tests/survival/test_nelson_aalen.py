"""
Tests for nelson_aalen() matching R survival::survfit(..., ctype=1).

R reference code:
    library(survival)
    fit <- survfit(Surv(time, event) ~ 1, ctype=1)
    data.frame(fit$time, fit$cumhaz, fit$std.chaz)

Times with only censoring are dropped from R's output before comparing;
this package reports event times only.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from pyhazard.core.exceptions import ValidationError
from pyhazard.survival import NelsonAalenSolution, nelson_aalen


# ── Fixtures ─────────────────────────────────────────────────────────

# One event at 1, an event and a censoring at 2, one event at 3
TIE_TIME = np.array([1, 2, 2, 3])
TIE_EVENT = np.array([1, 1, 0, 1])

# Classic textbook: 6 subjects, 2 censored
BASIC_TIME = np.array([1, 2, 3, 4, 5, 6], dtype=np.float64)
BASIC_EVENT = np.array([1, 0, 1, 0, 1, 1], dtype=np.float64)

# Lung-like dataset (larger, with ties)
LUNG_TIME = np.array([6, 7, 10, 15, 16, 22, 23, 6, 9, 10, 11, 17, 19, 20, 25, 32, 35],
                     dtype=np.float64)
LUNG_EVENT = np.array([1, 1, 1, 1, 0, 1, 1, 0, 1, 0, 1, 1, 1, 1, 0, 1, 0],
                      dtype=np.float64)


class TestNelsonAalenBasic:
    """Cumulative hazard and standard error values."""

    def test_tie_example(self):
        """
        n.risk = 4, 3, 1 and one event per time:
            H = 1/4, 1/4 + 1/3, 1/4 + 1/3 + 1
            Var = 3/64, + 2/27, + 0
        """
        result = nelson_aalen(TIE_TIME, TIE_EVENT)

        assert isinstance(result, NelsonAalenSolution)
        assert_array_equal(result.time, [1, 2, 3])
        assert_allclose(result.chaz, [0.25, 0.25 + 1 / 3, 1.25 + 1 / 3], rtol=1e-12)
        assert_allclose(
            result.stderr,
            np.sqrt([3 / 64, 3 / 64 + 2 / 27, 3 / 64 + 2 / 27]),
            rtol=1e-12,
        )

    def test_basic_six_subjects(self):
        """
        R:
            time <- c(1, 2, 3, 4, 5, 6)
            event <- c(1, 0, 1, 0, 1, 1)
            fit <- survfit(Surv(time, event) ~ 1, ctype=1)
            # event times 1 3 5 6, n.risk 6 4 2 1
        """
        result = nelson_aalen(BASIC_TIME, BASIC_EVENT)

        assert result.n_observations == 6
        assert result.n_events_total == 4
        assert_allclose(result.chaz, [1 / 6, 5 / 12, 11 / 12, 23 / 12], rtol=1e-12)
        var = np.cumsum([5 / 216, 3 / 64, 1 / 8, 0.0])
        assert_allclose(result.stderr, np.sqrt(var), rtol=1e-12)

    def test_tied_events_one_step(self):
        """Two events among five at risk add 2/5 in a single step."""
        result = nelson_aalen([2, 2, 2, 4, 5], [1, 1, 0, 1, 0])

        assert_array_equal(result.n_events, [2, 1])
        assert_allclose(result.chaz, [0.4, 0.9], rtol=1e-12)
        assert_allclose(result.stderr, np.sqrt([0.048, 0.048 + 0.125]), rtol=1e-12)

    def test_lung_matches_closed_form(self):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)

        n = result.n_risk.astype(np.float64)
        d = result.n_events.astype(np.float64)
        assert_allclose(result.chaz, np.cumsum(d / n), rtol=1e-12)
        assert_allclose(result.stderr, np.sqrt(np.cumsum(d * (n - d) / n**3)), rtol=1e-12)
        assert_array_equal(result.time, [6, 7, 9, 10, 11, 15, 17, 19, 20, 22, 23, 32])

    def test_single_subject_event(self):
        result = nelson_aalen([5], [1])

        assert_array_equal(result.chaz, [1.0])
        assert_array_equal(result.stderr, [0.0])
        ci = result.confint()
        assert_array_equal(ci, [[1.0, 1.0]])

    def test_monotone_on_random_data(self, rng):
        time = rng.exponential(10.0, size=500).round(1)
        event = rng.random(500) < 0.7
        result = nelson_aalen(time, event)

        assert np.all(np.diff(result.chaz) >= 0)
        assert np.all(result.stderr >= 0)
        assert np.all(np.diff(result.stderr) >= 0)


class TestEvaluate:
    """Right-continuous step-function queries."""

    def test_documented_queries(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)

        assert result.evaluate(1.5) == 0.25
        assert result.evaluate(0) == 0
        assert_allclose(result.evaluate(10), 1.25 + 1 / 3, rtol=1e-12)

    def test_before_first_event_is_zero(self):
        result = nelson_aalen(BASIC_TIME, BASIC_EVENT)
        for t in [-100.0, 0.0, 0.5, 0.999999]:
            assert result.evaluate(t) == 0.0

    def test_right_continuous_at_event_times(self):
        result = nelson_aalen(BASIC_TIME, BASIC_EVENT)
        for i, t in enumerate(result.time):
            assert result.evaluate(t) == result.chaz[i]

    def test_plateau(self):
        result = nelson_aalen(BASIC_TIME, BASIC_EVENT)
        times = result.time
        for i in range(len(times) - 1):
            grid = np.linspace(times[i], times[i + 1], 50, endpoint=False)
            assert np.all(result.evaluate(grid) == result.evaluate(times[i]))

    def test_array_query_shape(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        query = np.array([[0.0, 1.0], [2.5, 99.0]])
        values = result.evaluate(query)

        assert values.shape == (2, 2)
        assert_allclose(values, [[0.0, 0.25], [0.25 + 1 / 3, 1.25 + 1 / 3]], rtol=1e-12)

    def test_list_query(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        assert_allclose(result.evaluate([0, 1]), [0.0, 0.25])

    def test_call_matches_evaluate(self):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)
        for t in [0, 6, 8.5, 20, 100]:
            assert result(t) == result.evaluate(t)

    def test_idempotent(self):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)
        first = result.evaluate(12.0)
        for _ in range(5):
            assert result.evaluate(12.0) == first
        assert_allclose(result.chaz, nelson_aalen(LUNG_TIME, LUNG_EVENT).chaz)

    def test_scalar_keeps_value_type(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT, value_type=np.float32)
        assert isinstance(result.evaluate(2), np.float32)
        assert isinstance(result.evaluate(0), np.float32)

    def test_concurrent_readers(self):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)
        queries = np.linspace(0, 40, 400)
        expected = result.evaluate(queries)

        with ThreadPoolExecutor(max_workers=8) as pool:
            values = list(pool.map(result.evaluate, queries))

        assert_array_equal(values, expected)

    def test_nan_query_is_nan(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        value = result.evaluate(np.nan)

        assert np.isnan(value)
        assert isinstance(value, np.float64)

    def test_nan_in_array_query(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        values = result.evaluate([0.5, np.nan, 2.5])

        assert_allclose(values[[0, 2]], [0.0, 0.25 + 1 / 3], rtol=1e-12)
        assert np.isnan(values[1])

    def test_nat_query_is_nan(self):
        time = np.array(["2024-01-01", "2024-01-05"], dtype="datetime64[D]")
        result = nelson_aalen(time, [1, 1])

        assert np.isnan(result.evaluate(np.datetime64("NaT")))
        values = result.evaluate(np.array(["2024-01-02", "NaT"], dtype="datetime64[D]"))
        assert_allclose(values[0], 0.5)
        assert np.isnan(values[1])

    def test_empty_estimator_returns_zero(self):
        with pytest.warns(RuntimeWarning, match="No events observed"):
            result = nelson_aalen([1, 2, 3], [0, 0, 0])

        assert len(result.chaz) == 0
        assert result.evaluate(2.0) == 0.0
        assert_array_equal(result.evaluate([0, 5, 10]), [0.0, 0.0, 0.0])


class TestConfint:
    """Symmetric Wald intervals, not clipped at zero."""

    def test_default_level_values(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        ci = result.confint()

        z = 1.959963984540054
        assert ci.shape == (3, 2)
        assert_allclose(ci[:, 0], result.chaz - z * result.stderr, rtol=1e-10)
        assert_allclose(ci[:, 1], result.chaz + z * result.stderr, rtol=1e-10)

    def test_contains_estimate(self):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)
        ci = result.confint(0.05)

        assert np.all(ci[:, 0] <= result.chaz)
        assert np.all(result.chaz <= ci[:, 1])

    def test_negative_lower_bound_kept(self):
        """0.25 - 1.96 * sqrt(3/64) < 0 and must not be clipped."""
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        assert result.confint()[0, 0] < 0

    def test_smaller_level_is_wider(self):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)
        wide = result.confint(0.025)
        narrow = result.confint(0.05)

        assert np.all(wide[:, 1] - wide[:, 0] >= narrow[:, 1] - narrow[:, 0])
        assert np.all(wide[:, 0] <= narrow[:, 0])

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5, -0.5, 2.0, np.nan])
    def test_level_out_of_range(self, level):
        result = nelson_aalen(LUNG_TIME, LUNG_EVENT)
        with pytest.raises(ValidationError):
            result.confint(level)

    def test_level_message_names_level(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        with pytest.raises(ValidationError, match=r"level: must be in \(0, 1\)"):
            result.confint(1.5)

    def test_empty_estimator(self):
        with pytest.warns(RuntimeWarning):
            result = nelson_aalen([], [])
        assert result.confint().shape == (0, 2)


class TestSolution:
    """Immutability and reporting."""

    def test_outputs_read_only(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        with pytest.raises(ValueError):
            result.chaz[0] = 10.0
        with pytest.raises(ValueError):
            result.stderr[0] = 10.0

    def test_no_new_attributes(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        with pytest.raises(AttributeError):
            result.chaz = np.zeros(3)

    def test_summary(self):
        result = nelson_aalen(BASIC_TIME, BASIC_EVENT)
        text = result.summary()

        assert "Nelson-Aalen" in text
        assert "cumhaz" in text
        assert "n=6, events=4" in text

    def test_summary_truncates(self):
        time = np.arange(1, 31)
        result = nelson_aalen(time, np.ones(30))
        assert "(10 more rows)" in result.summary()

    def test_repr(self):
        result = nelson_aalen(TIE_TIME, TIE_EVENT)
        assert repr(result).startswith("NelsonAalenSolution(n=4, events=3")
