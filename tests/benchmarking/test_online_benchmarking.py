"""Tests for stream simulation, metrics and the evaluation loop."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from online_fdr_analysis.benchmarking import (
    benjamini_hochberg_correction,
    evaluate_procedure,
    false_discovery_proportion,
    generate_online_stream,
    statistical_power,
)


class TestGenerateOnlineStream:
    def test_shapes_and_ranges(self):
        hypotheses, p_values = generate_online_stream(100, pi1=0.2, seed=1)
        assert hypotheses.shape == p_values.shape == (100,)
        assert set(np.unique(hypotheses)) <= {0, 1}
        assert np.all((p_values >= 0) & (p_values <= 1))

    def test_seed_is_reproducible(self):
        first = generate_online_stream(50, seed=5)
        second = generate_online_stream(50, seed=5)
        assert_array_equal(first[0], second[0])
        assert_array_equal(first[1], second[1])

    def test_invalid_pi1(self):
        with pytest.raises(ValueError, match="pi1"):
            generate_online_stream(10, pi1=1.5)


class TestMetrics:
    def test_false_discovery_proportion(self):
        rejected = np.array([True, True, False, True])
        hypotheses = np.array([1, 0, 0, 1])
        assert false_discovery_proportion(rejected, hypotheses) == pytest.approx(1 / 3)

    def test_no_rejections(self):
        assert false_discovery_proportion(np.zeros(3, dtype=bool), np.ones(3)) == 0.0

    def test_power(self):
        rejected = np.array([True, False, False, True])
        hypotheses = np.array([1, 1, 0, 0])
        assert statistical_power(rejected, hypotheses) == 0.5
        assert statistical_power(rejected, np.zeros(4)) == 0.0


class TestBaseline:
    def test_benjamini_hochberg(self):
        rejected, adjusted = benjamini_hochberg_correction(
            np.array([0.001, 0.01, 0.03, 0.05, 0.1])
        )
        assert_array_equal(rejected, [True, True, True, False, False])
        assert np.all(adjusted >= np.array([0.001, 0.01, 0.03, 0.05, 0.1]))

    def test_empty(self):
        rejected, adjusted = benjamini_hochberg_correction(np.array([]))
        assert rejected.size == adjusted.size == 0


class TestEvaluateProcedure:
    def test_one_row_per_trial_and_method(self):
        results = evaluate_procedure(
            "batch", n_trials=3, n_tests=40, batch_sizes=[10, 10, 20]
        )
        assert len(results) == 6
        assert set(results["method"]) == {"LORD*-batch", "BH (offline)"}
        assert results["fdp"].between(0, 1).all()
        assert results["power"].between(0, 1).all()

    def test_seeded_runs_repeat(self):
        kwargs = dict(n_trials=2, n_tests=30, lags=np.zeros(30, dtype=int))
        first = evaluate_procedure("dep", **kwargs)
        second = evaluate_procedure("dep", **kwargs)
        assert first.equals(second)
