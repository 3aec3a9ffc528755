"""LORD* procedures for asynchronous, locally dependent and batched p-values.

Three versions of LORD (Levels based On Recent Discovery) from Zrnic et al.
(2018). They share a single threshold recursion and differ only in which
earlier outcomes a test is allowed to see:

- ``lordstar_async``: test j's outcome becomes visible at its decision time.
- ``lordstar_dep``: test i ignores the outcomes of the ``lags[i]`` tests just
  before it.
- ``lordstar_batch``: tests inside a mini-batch cannot see each other; all
  earlier batches are visible.

All three are pure functions of their inputs: the rejection history lives in
the call and nothing carries over between runs.

References
----------
Zrnic, T., Ramdas, A. and Jordan, M. I. (2018). Asynchronous online testing of
multiple hypotheses. arXiv:1812.05068.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from online_fdr_analysis import config

from .history import RejectionHistoryTracker
from .recursion import ThresholdRecursion, run_sequential_recursion
from .visibility import AsyncHorizonRule, BatchBoundaryRule, BatchIndexTable, LagRule

logger = logging.getLogger(__name__)


@dataclass
class LordStarResult:
    """Per-test output of the asynchronous and dependency versions.

    Attributes
    ----------
    p_values : np.ndarray
        The input p-values.
    alphai : np.ndarray
        Test level assigned to each test.
    rejected : np.ndarray
        Boolean rejection decisions, ``p_values <= alphai``.
    lags : np.ndarray, optional
        The input lags (dependency version only).
    """

    p_values: NDArray[np.float64]
    alphai: NDArray[np.float64]
    rejected: NDArray[np.bool_]
    lags: Optional[NDArray[np.int64]] = None


@dataclass
class LordStarBatchResult:
    """Output of the batch version, shaped ``[n_batches, max_batch_size]``.

    Cells beyond a batch's size hold ``nan`` in ``alphai`` and ``False`` in
    ``rejected``.
    """

    alphai: NDArray[np.float64]
    rejected: NDArray[np.bool_]
    batch_sizes: NDArray[np.int64]


def lordstar_async(
    p_values: ArrayLike,
    decision_times: ArrayLike,
    gammai: ArrayLike,
    w0: float = config.DEFAULT_W0,
    alpha: float = config.DEFAULT_ALPHA,
    checkpoint: Optional[Callable[[], None]] = None,
) -> LordStarResult:
    """LORD* for asynchronous tests.

    Parameters
    ----------
    p_values : array-like
        P-values in arrival order.
    decision_times : array-like of int
        ``decision_times[j]`` is the first step whose test may use the outcome
        of test j. ``[1, 2, ..., N]`` is ordinary synchronous testing.
    gammai : array-like
        Discount sequence, length at least ``len(p_values)``.
    w0 : float
        Initial wealth.
    alpha : float
        Target level.
    checkpoint : callable, optional
        Invoked once per scanned earlier test; raise from it to cancel.

    Returns
    -------
    LordStarResult

    Examples
    --------
    >>> res = lordstar_async([0.001, 0.2], [1, 2], [0.4, 0.25])
    >>> res.rejected.tolist()
    [True, False]
    """
    pvals = np.asarray(p_values, dtype=float)
    recursion = ThresholdRecursion(gammai, w0=w0, alpha=alpha)
    alphai, rejected = run_sequential_recursion(
        pvals, AsyncHorizonRule(decision_times), recursion, checkpoint=checkpoint
    )
    return LordStarResult(p_values=pvals, alphai=alphai, rejected=rejected)


def lordstar_dep(
    p_values: ArrayLike,
    lags: ArrayLike,
    gammai: ArrayLike,
    w0: float = config.DEFAULT_W0,
    alpha: float = config.DEFAULT_ALPHA,
    checkpoint: Optional[Callable[[], None]] = None,
) -> LordStarResult:
    """LORD* under local dependence.

    Test i may only use rejections among tests ``0 .. i - lags[i] - 1``; the
    ``lags[i]`` tests right before it are treated as dependent and ignored.

    Parameters
    ----------
    p_values : array-like
        P-values in arrival order.
    lags : array-like of int
        Lag of each test, same length as ``p_values``.
    gammai, w0, alpha, checkpoint
        As in :func:`lordstar_async`.

    Returns
    -------
    LordStarResult
        With ``lags`` echoed back.
    """
    pvals = np.asarray(p_values, dtype=float)
    lag_array = np.asarray(lags, dtype=np.int64)
    recursion = ThresholdRecursion(gammai, w0=w0, alpha=alpha)
    alphai, rejected = run_sequential_recursion(
        pvals, LagRule(lag_array), recursion, checkpoint=checkpoint
    )
    return LordStarResult(
        p_values=pvals, alphai=alphai, rejected=rejected, lags=lag_array
    )


def lordstar_batch(
    p_values: ArrayLike,
    batch_sizes: ArrayLike,
    gammai: ArrayLike,
    w0: float = config.DEFAULT_W0,
    alpha: float = config.DEFAULT_ALPHA,
    batch_sums: Optional[ArrayLike] = None,
    checkpoint: Optional[Callable[[], None]] = None,
) -> LordStarBatchResult:
    """LORD* for mini-batches.

    Batch 0 is tested at ``gamma[i] * w0``. Every later batch sees the
    rejections of all completed batches and none of its own. Ages of visible
    rejections are measured in tests, from the first test after the batch in
    which the rejection became visible.

    Parameters
    ----------
    p_values : array-like
        P-values flattened in arrival order (batch 0 first).
    batch_sizes : array-like of int
        Number of tests in each batch.
    gammai, w0, alpha
        As in :func:`lordstar_async`.
    batch_sums : array-like of int, optional
        Inclusive prefix sums of ``batch_sizes``; computed when omitted.
    checkpoint : callable, optional
        Invoked once per test in batches after the first.

    Returns
    -------
    LordStarBatchResult

    Examples
    --------
    >>> res = lordstar_batch([0.001, 0.001, 0.5], [2, 1], [0.4, 0.25, 0.15])
    >>> res.rejected.tolist()
    [[True, True], [False, False]]
    """
    pvals = np.asarray(p_values, dtype=float)
    if batch_sums is None:
        table = BatchIndexTable.from_sizes(batch_sizes)
    else:
        table = BatchIndexTable(
            sizes=np.asarray(batch_sizes, dtype=np.int64),
            ends=np.asarray(batch_sums, dtype=np.int64),
        )
    recursion = ThresholdRecursion(gammai, w0=w0, alpha=alpha)

    n_batches = table.n_batches
    alphai = np.full((n_batches, table.max_size), np.nan, dtype=float)
    rejected = np.zeros((n_batches, table.max_size), dtype=bool)

    if n_batches == 0:
        return LordStarBatchResult(alphai=alphai, rejected=rejected, batch_sizes=table.sizes)

    for x in range(table.sizes[0]):
        alphai[0, x] = recursion.initial_threshold(x)
        rejected[0, x] = recursion.decide(pvals[x], alphai[0, x])

    tracker = RejectionHistoryTracker(BatchBoundaryRule())
    tracker.record(rejected[0].sum())

    for b in range(1, n_batches):
        # Batch-level running total; count entry k is the total through batch k.
        tracker.update(b)
        visible_batches = tracker.visible_positions()

        for x in range(table.sizes[b]):
            if checkpoint is not None:
                checkpoint()
            i = table.global_index(b, x)
            ages = [i - table.end(int(r)) for r in visible_batches]

            alphai[b, x] = recursion.threshold(i, ages)
            rejected[b, x] = recursion.decide(pvals[i], alphai[b, x])

        tracker.record(rejected[b].sum())

    logger.debug(
        "LORD* batch recursion finished: %d batches, %d rejections",
        n_batches,
        int(rejected.sum()),
    )
    return LordStarBatchResult(alphai=alphai, rejected=rejected, batch_sizes=table.sizes)


__all__ = [
    "LordStarResult",
    "LordStarBatchResult",
    "lordstar_async",
    "lordstar_dep",
    "lordstar_batch",
]
