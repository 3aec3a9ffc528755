"""Front end for the LORD* procedures.

This module validates arguments, fills in defaults, dispatches to the version
selected by a string identifier and assembles the result into a long-format
DataFrame.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from online_fdr_analysis import config

from .discount import lord_discount_sequence
from .lord_star import lordstar_async, lordstar_batch, lordstar_dep
from .progress import ProgressCheckpoint
from .validation import (
    check_alpha,
    check_gammai,
    check_lordstar_version,
    check_p_values,
    check_w0,
)

logger = logging.getLogger(__name__)


def lord_star(
    p_values: ArrayLike,
    alpha: float = config.DEFAULT_ALPHA,
    version: str = "async",
    gammai: Optional[ArrayLike] = None,
    w0: Optional[float] = None,
    decision_times: Optional[ArrayLike] = None,
    lags: Optional[ArrayLike] = None,
    batch_sizes: Optional[ArrayLike] = None,
    display_progress: bool = False,
    cancel_event: Optional[threading.Event] = None,
) -> pd.DataFrame:
    """Asynchronous online mFDR control based on recent discovery (LORD*).

    Parameters
    ----------
    p_values : array-like
        P-values in arrival order.
    alpha : float, default=0.05
        Overall significance level, in (0, 1].
    version : str
        One of:
        - "async": tests finish at ``decision_times``
        - "dep": p-values locally dependent on the previous ``lags`` tests
        - "batch": mini-batches of ``batch_sizes`` tests
    gammai : array-like, optional
        Non-negative discount sequence summing to at most 1. Defaults to
        :func:`lord_discount_sequence`.
    w0 : float, optional
        Initial wealth, ``0 <= w0 <= alpha``. Defaults to ``alpha / 10``.
    decision_times, lags, batch_sizes : array-like of int, optional
        Schedule of the selected version; exactly the matching one is used.
    display_progress : bool
        Show a progress bar.
    cancel_event : threading.Event, optional
        Setting the event aborts the run with ``RunCancelledError``.

    Returns
    -------
    pd.DataFrame
        One row per test with columns ``pval``, ``alphai`` and ``R`` (0/1),
        plus ``lag`` for "dep" and the 1-based ``batch`` number for "batch".

    Raises
    ------
    ValueError
        If an argument is invalid or the schedule of ``version`` is missing.

    Examples
    --------
    >>> pval = [2.90e-08, 0.06743, 3.51e-04, 0.00174, 0.04723]
    >>> out = lord_star(pval, version="async", decision_times=[1, 2, 3, 4, 5])
    >>> list(out.columns)
    ['pval', 'alphai', 'R']
    """
    pvals = check_p_values(p_values)
    n = pvals.size
    alpha = check_alpha(alpha)
    w0 = check_w0(w0, alpha)
    version, schedule = check_lordstar_version(
        n, version, decision_times=decision_times, lags=lags, batch_sizes=batch_sizes
    )
    gammai = lord_discount_sequence(n) if gammai is None else check_gammai(gammai, n)

    logger.debug(
        "Running LORD* version=%s on %d p-values (alpha=%g, w0=%g)",
        version,
        n,
        alpha,
        w0,
    )

    if version == "async":
        with ProgressCheckpoint(
            total=n * (n - 1) // 2,
            display_progress=display_progress,
            cancel_event=cancel_event,
        ) as checkpoint:
            result = lordstar_async(
                pvals, schedule, gammai, w0=w0, alpha=alpha, checkpoint=checkpoint
            )
        return pd.DataFrame(
            {
                "pval": result.p_values,
                "alphai": result.alphai,
                "R": result.rejected.astype(int),
            }
        )
    elif version == "dep":
        with ProgressCheckpoint(
            total=n * (n - 1) // 2,
            display_progress=display_progress,
            cancel_event=cancel_event,
        ) as checkpoint:
            result = lordstar_dep(
                pvals, schedule, gammai, w0=w0, alpha=alpha, checkpoint=checkpoint
            )
        return pd.DataFrame(
            {
                "pval": result.p_values,
                "lag": result.lags,
                "alphai": result.alphai,
                "R": result.rejected.astype(int),
            }
        )
    else:
        with ProgressCheckpoint(
            total=int(schedule[1:].sum()),
            display_progress=display_progress,
            cancel_event=cancel_event,
        ) as checkpoint:
            batch_result = lordstar_batch(
                pvals, schedule, gammai, w0=w0, alpha=alpha, checkpoint=checkpoint
            )
        # Row-major flatten keeps arrival order; drop the padding cells.
        used = np.arange(batch_result.alphai.shape[1])[None, :] < schedule[:, None]
        return pd.DataFrame(
            {
                "pval": pvals,
                "batch": np.repeat(np.arange(1, schedule.size + 1), schedule),
                "alphai": batch_result.alphai[used],
                "R": batch_result.rejected[used].astype(int),
            }
        )


__all__ = ["lord_star"]
