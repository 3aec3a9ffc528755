"""Error-rate and power metrics for a single run."""

from __future__ import annotations

import numpy as np


def false_discovery_proportion(rejected: np.ndarray, hypotheses: np.ndarray) -> float:
    """Fraction of rejections that are true nulls (0 when nothing is rejected)."""
    rejected = np.asarray(rejected, dtype=bool)
    n_rejected = int(rejected.sum())
    if n_rejected == 0:
        return 0.0
    false_rejections = int(np.sum(rejected & (np.asarray(hypotheses) == 0)))
    return false_rejections / n_rejected


def statistical_power(rejected: np.ndarray, hypotheses: np.ndarray) -> float:
    """Fraction of true non-nulls that are rejected (0 when there are none)."""
    non_null = np.asarray(hypotheses) == 1
    n_non_null = int(non_null.sum())
    if n_non_null == 0:
        return 0.0
    return int(np.sum(np.asarray(rejected, dtype=bool) & non_null)) / n_non_null


__all__ = ["false_discovery_proportion", "statistical_power"]
