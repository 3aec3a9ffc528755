"""Synthetic p-value streams for benchmarking online procedures."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy.stats import norm


def generate_online_stream(
    n_tests: int,
    pi1: float = 0.1,
    signal: float = 3.0,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw a stream of one-sided z-test p-values.

    Each hypothesis is non-null with probability ``pi1``. Null z-scores are
    N(0, 1), non-null ones N(signal, 1).

    Returns
    -------
    hypotheses : np.ndarray (int)
        1 for a true non-null, 0 for a true null.
    p_values : np.ndarray (float)
        One-sided p-values ``P(Z >= z)``.
    """
    if not 0 <= pi1 <= 1:
        raise ValueError(f"pi1 must be in [0, 1], got {pi1}")

    rng = np.random.default_rng(seed)
    hypotheses = rng.binomial(1, pi1, size=n_tests)
    z_scores = rng.standard_normal(n_tests) + signal * hypotheses
    return hypotheses, norm.sf(z_scores)


__all__ = ["generate_online_stream"]
