"""Offline Benjamini-Hochberg baseline.

BH sees the whole stream at once, so it is the natural yardstick for the
power an online procedure gives up by deciding test by test.

References
----------
Benjamini, Y., and Hochberg, Y. (1995). Controlling the false discovery
rate: a practical and powerful approach to multiple testing. Journal of
the Royal Statistical Society Series B, 57, 289-300.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from statsmodels.stats.multitest import multipletests


def benjamini_hochberg_correction(
    p_values: np.ndarray, alpha: float = 0.05
) -> Tuple[np.ndarray, np.ndarray]:
    """Apply offline Benjamini-Hochberg FDR correction to a full stream.

    Parameters
    ----------
    p_values : np.ndarray
        All p-values of the stream
    alpha : float, default=0.05
        Target FDR level

    Returns
    -------
    rejected_hypotheses : np.ndarray (bool)
        Which null hypotheses BH rejects
    adjusted_p_values : np.ndarray (float)
        BH-adjusted p-values

    Examples
    --------
    >>> import numpy as np
    >>> rejected, adjusted = benjamini_hochberg_correction(
    ...     np.array([0.001, 0.01, 0.03, 0.05, 0.1])
    ... )
    >>> rejected
    array([ True,  True,  True, False, False])
    """
    p_values_array = np.asarray(p_values, dtype=float)

    if p_values_array.size == 0:
        return np.array([], dtype=bool), np.array([], dtype=float)

    rejected, adjusted, _, _ = multipletests(
        p_values_array,
        alpha=alpha,
        method="fdr_bh",
        is_sorted=False,
        returnsorted=False,
    )
    return rejected.astype(bool), adjusted.astype(float)


__all__ = ["benjamini_hochberg_correction"]
