"""Tests for the ``lord_star`` front end: defaults, validation and output layout."""

from __future__ import annotations

import threading

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from online_fdr_analysis.online_testing import (
    RunCancelledError,
    lord_discount_sequence,
    lord_star,
)

PVAL = np.array(
    [
        2.90e-08, 0.06743, 3.51e-04, 0.00174, 0.04723,
        3.60e-05, 0.79149, 0.27201, 0.28295, 7.59e-06,
        0.69274, 0.30443, 0.00136, 0.82342, 0.54757,
    ]
)
N = PVAL.size


class TestOutputLayout:
    def test_async_columns(self):
        out = lord_star(PVAL, version="async", decision_times=np.arange(1, N + 1))
        assert isinstance(out, pd.DataFrame)
        assert list(out.columns) == ["pval", "alphai", "R"]
        assert len(out) == N
        assert set(out["R"].unique()) <= {0, 1}

    def test_dep_columns(self):
        out = lord_star(PVAL, version="dep", lags=np.ones(N, dtype=int))
        assert list(out.columns) == ["pval", "lag", "alphai", "R"]
        assert_array_equal(out["lag"], np.ones(N))

    def test_batch_columns_and_order(self):
        out = lord_star(PVAL, version="batch", batch_sizes=[4, 6, 5])
        assert list(out.columns) == ["pval", "batch", "alphai", "R"]
        assert_array_equal(out["pval"], PVAL)
        assert_array_equal(out["batch"], [1] * 4 + [2] * 6 + [3] * 5)
        assert not out["alphai"].isna().any()

    def test_decisions_follow_levels(self):
        out = lord_star(PVAL, version="batch", batch_sizes=[4, 6, 5])
        assert_array_equal(out["R"], (out["pval"] <= out["alphai"]).astype(int))


class TestDefaults:
    def test_default_w0_and_gammai(self):
        out = lord_star(PVAL, alpha=0.1, version="async", decision_times=np.arange(1, N + 1))
        assert_allclose(
            out["alphai"].iloc[0], lord_discount_sequence(N)[0] * 0.01, rtol=1e-12
        )

    def test_version_is_case_insensitive(self):
        out = lord_star(PVAL, version="ASYNC", decision_times=np.arange(1, N + 1))
        assert len(out) == N

    def test_synchronous_versions_agree(self):
        by_time = lord_star(PVAL, version="async", decision_times=np.arange(1, N + 1))
        by_lag = lord_star(PVAL, version="dep", lags=np.zeros(N, dtype=int))
        by_batch = lord_star(PVAL, version="batch", batch_sizes=np.ones(N, dtype=int))
        assert_array_equal(by_time["alphai"], by_lag["alphai"])
        assert_array_equal(by_time["alphai"], by_batch["alphai"])
        assert_array_equal(by_time["R"], by_batch["R"])


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"version": "sync", "decision_times": np.arange(1, N + 1)}, "Unknown"),
            ({"version": "async"}, "decision_times required"),
            ({"version": "dep"}, "lags required"),
            ({"version": "batch"}, "batch_sizes required"),
            ({"version": "async", "decision_times": np.arange(N)}, "greater than j"),
            ({"version": "async", "decision_times": [1, 2]}, "one entry per p-value"),
            ({"version": "dep", "lags": np.full(N, -1)}, "non-negative"),
            ({"version": "dep", "lags": np.full(N, 0.5)}, "integers"),
            ({"version": "dep", "lags": [0] * 5 + [4] * (N - 5)}, "must not shrink"),
            ({"version": "batch", "batch_sizes": [4, 6]}, "sum to the number"),
            ({"version": "batch", "batch_sizes": []}, "must not be empty"),
        ],
    )
    def test_schedule_errors(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            lord_star(PVAL, **kwargs)

    @pytest.mark.parametrize(
        "p_values",
        [[], [0.1, np.nan], [0.1, 1.5], [-0.1, 0.2], [0.1, np.inf]],
    )
    def test_p_value_errors(self, p_values):
        with pytest.raises(ValueError, match="p_values"):
            lord_star(p_values, version="batch", batch_sizes=[len(p_values)])

    @pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
    def test_alpha_errors(self, alpha):
        with pytest.raises(ValueError, match="alpha"):
            lord_star(PVAL, alpha=alpha, version="dep", lags=np.zeros(N, dtype=int))

    @pytest.mark.parametrize("w0", [-0.01, 0.2])
    def test_w0_errors(self, w0):
        with pytest.raises(ValueError, match="w0"):
            lord_star(PVAL, w0=w0, version="dep", lags=np.zeros(N, dtype=int))

    @pytest.mark.parametrize(
        "gammai, match",
        [
            (np.full(N, 0.1), "sum"),
            (np.r_[-0.1, np.full(N - 1, 0.01)], "non-negative"),
            (np.full(N - 1, 0.01), "at least"),
        ],
    )
    def test_gammai_errors(self, gammai, match):
        with pytest.raises(ValueError, match=match):
            lord_star(PVAL, gammai=gammai, version="dep", lags=np.zeros(N, dtype=int))

    def test_zero_w0_warns(self):
        with pytest.warns(UserWarning, match="w0 = 0"):
            lord_star(PVAL, w0=0.0, version="dep", lags=np.zeros(N, dtype=int))

    def test_all_zero_gammai_warns(self):
        with pytest.warns(UserWarning, match="gammai is zero"):
            out = lord_star(
                PVAL, gammai=np.zeros(N), version="batch", batch_sizes=[5, 5, 5]
            )
        assert_array_equal(out["alphai"], np.zeros(N))
        assert out["R"].sum() == 0


class TestCancellation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"version": "async", "decision_times": np.arange(1, N + 1)},
            {"version": "dep", "lags": np.zeros(N, dtype=int)},
            {"version": "batch", "batch_sizes": [5, 5, 5]},
        ],
    )
    def test_set_event_aborts_run(self, kwargs):
        event = threading.Event()
        event.set()
        with pytest.raises(RunCancelledError):
            lord_star(PVAL, cancel_event=event, **kwargs)

    def test_unset_event_runs_to_completion(self):
        out = lord_star(
            PVAL,
            version="async",
            decision_times=np.arange(1, N + 1),
            cancel_event=threading.Event(),
            display_progress=True,
        )
        assert len(out) == N
