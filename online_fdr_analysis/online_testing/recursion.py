"""LORD* threshold recursion shared by all visibility models.

For a test at global index ``i`` whose visible rejections are ``a_0, a_1,
...`` steps old (oldest first), the test level is

    alpha_i = gamma[i] * w0
              + (alpha - w0) * gamma[a_0]
              + alpha * sum(gamma[a_g] for g >= 1)

and the test is rejected iff ``p_i <= alpha_i``. The first visible rejection
returns the initial-wealth complement, every later one returns the full alpha.

References
----------
Zrnic, T., Ramdas, A. and Jordan, M. I. (2018). Asynchronous online testing of
multiple hypotheses. arXiv:1812.05068.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .discount import WealthDiscountTable
from .history import RejectionHistoryTracker
from .visibility import VisibilityRule

logger = logging.getLogger(__name__)


class ThresholdRecursion:
    """Threshold and decision rule for one LORD* run.

    Parameters
    ----------
    gammai
        Discount sequence, one entry per step offset.
    w0
        Initial wealth.
    alpha
        Target level.
    """

    def __init__(self, gammai: ArrayLike, w0: float, alpha: float):
        self.discount = (
            gammai
            if isinstance(gammai, WealthDiscountTable)
            else WealthDiscountTable(gammai)
        )
        self.w0 = float(w0)
        self.alpha = float(alpha)

    def initial_threshold(self, index: int) -> float:
        """Level of a test that sees no history."""
        return self.discount[index] * self.w0

    def threshold(self, index: int, ages: Sequence[int]) -> float:
        """Level of test ``index`` given the ages of its visible rejections."""
        level = self.initial_threshold(index)
        if len(ages) == 0:
            return level

        level += (self.alpha - self.w0) * self.discount[ages[0]]
        if len(ages) > 1:
            level += self.alpha * sum(self.discount[age] for age in ages[1:])
        return level

    @staticmethod
    def decide(p_value: float, threshold: float) -> bool:
        return bool(p_value <= threshold)


def run_sequential_recursion(
    p_values: ArrayLike,
    rule: VisibilityRule,
    recursion: ThresholdRecursion,
    checkpoint: Optional[Callable[[], None]] = None,
) -> Tuple[NDArray[np.float64], NDArray[np.bool_]]:
    """Run the per-test LORD* recursion under ``rule``.

    Steps are evaluated strictly in order: update the visible count, invert
    it, compute the level, decide, record the decision.

    Returns
    -------
    thresholds : np.ndarray (float)
        Test level of each test.
    rejected : np.ndarray (bool)
        Rejection decision of each test.
    """
    pvals = np.asarray(p_values, dtype=float)
    n = pvals.size
    thresholds = np.zeros(n, dtype=float)
    rejected = np.zeros(n, dtype=bool)

    if n == 0:
        return thresholds, rejected

    tracker = RejectionHistoryTracker(rule, checkpoint=checkpoint)

    thresholds[0] = recursion.initial_threshold(0)
    rejected[0] = recursion.decide(pvals[0], thresholds[0])
    tracker.record(rejected[0])

    for i in range(1, n):
        tracker.update(i)
        # Count entry k belongs to step k + 1.
        positions = tracker.visible_positions()
        ages = [i - int(k) - 1 for k in positions]

        thresholds[i] = recursion.threshold(i, ages)
        rejected[i] = recursion.decide(pvals[i], thresholds[i])
        tracker.record(rejected[i])

    logger.debug(
        "LORD* recursion finished: %d tests, %d rejections",
        n,
        int(rejected.sum()),
    )
    return thresholds, rejected


__all__ = ["ThresholdRecursion", "run_sequential_recursion"]
