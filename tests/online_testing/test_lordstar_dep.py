"""Tests for the LORD* procedure under local dependence."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from online_fdr_analysis.online_testing.lord_star import lordstar_dep

GAMMAI = np.array([0.4, 0.25, 0.15, 0.1, 0.1])
W0 = 0.005
ALPHA = 0.05


class TestLordStarDep:
    def test_lag_one_hides_previous_test(self):
        res = lordstar_dep([0.001, 0.001, 0.5], [0, 1, 1], GAMMAI, W0, ALPHA)
        # Test 1 cannot see test 0; test 2 sees test 0 only.
        assert_allclose(
            res.alphai, [0.002, 0.00125, 0.00075 + (ALPHA - W0) * 0.4], rtol=1e-12
        )
        assert_array_equal(res.rejected, [True, True, False])

    def test_lags_are_echoed(self):
        lags = np.array([0, 1, 1])
        res = lordstar_dep([0.5, 0.5, 0.5], lags, GAMMAI)
        assert_array_equal(res.lags, lags)
        assert_array_equal(res.p_values, [0.5, 0.5, 0.5])

    def test_lag_equal_to_step_index_sees_nothing(self):
        n = 5
        res = lordstar_dep(np.full(n, 1e-6), np.arange(n), GAMMAI, W0, ALPHA)
        assert res.rejected.all()
        assert_allclose(res.alphai, GAMMAI * W0, rtol=1e-12)

    def test_lag_longer_than_history_sees_nothing(self):
        n = 4
        res = lordstar_dep(np.full(n, 1e-6), np.full(n, 10), GAMMAI, W0, ALPHA)
        assert_allclose(res.alphai, GAMMAI[:n] * W0, rtol=1e-12)

    def test_zero_lag_is_synchronous(self):
        p_values = [0.001, 0.2, 0.03, 0.5, 0.02]
        res = lordstar_dep(p_values, np.zeros(5, dtype=int), GAMMAI, W0, ALPHA)
        assert_allclose(
            res.alphai, [0.002, 0.01925, 0.012, 0.00725, 0.005], rtol=1e-12
        )

    def test_shrinking_visible_history_is_rejected(self):
        """A lag jump that hides an already visible rejection breaks inversion."""
        with pytest.raises(ValueError, match="non-decreasing"):
            lordstar_dep([0.001, 0.5, 0.5], [0, 0, 2], GAMMAI, W0, ALPHA)

    def test_checkpoint_called_per_scanned_test(self):
        calls = []
        lordstar_dep(
            np.full(4, 0.5),
            np.zeros(4, dtype=int),
            GAMMAI,
            checkpoint=lambda: calls.append(1),
        )
        assert len(calls) == 1 + 2 + 3
