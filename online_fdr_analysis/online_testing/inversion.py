"""Step-function inversion of cumulative visible-rejection counts.

Given the cumulative number of visible rejections at each step (or batch),
recover the position at which the 1st, 2nd, ... visible rejection first
appeared. All three LORD* procedures share this utility.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


def invert_cumulative_counts(counts: ArrayLike) -> NDArray[np.intp]:
    """Positions at which each additional visible rejection first appeared.

    For every level ``y = 0, ..., max(counts) - 1`` return the leftmost
    position ``k`` with ``counts[k] > y``. Ties resolve to the leftmost
    position, so a jump of two at one position reports that position twice.

    Parameters
    ----------
    counts : array-like of int
        Non-decreasing cumulative counts.

    Returns
    -------
    np.ndarray (intp)
        Ordered positions, one per visible rejection. Empty if no rejection
        is visible.

    Raises
    ------
    ValueError
        If ``counts`` decreases anywhere, or is not one-dimensional.

    Examples
    --------
    >>> invert_cumulative_counts([0, 1, 1, 3])
    array([1, 3, 3])
    >>> invert_cumulative_counts([0, 0]).size
    0
    """
    counts_array = np.asarray(counts)
    if counts_array.ndim != 1:
        raise ValueError(
            f"counts must be one-dimensional, got shape {counts_array.shape}"
        )

    if counts_array.size == 0:
        return np.zeros(0, dtype=np.intp)

    # Visibility can only accumulate; a drop would silently corrupt the result.
    if np.any(np.diff(counts_array) < 0):
        bad = int(np.flatnonzero(np.diff(counts_array) < 0)[0]) + 1
        raise ValueError(
            f"cumulative counts must be non-decreasing; decrease at position {bad}"
        )

    n_levels = int(counts_array[-1])
    if n_levels <= 0:
        return np.zeros(0, dtype=np.intp)

    levels = np.arange(n_levels)
    return np.searchsorted(counts_array, levels, side="right").astype(np.intp)


__all__ = ["invert_cumulative_counts"]
