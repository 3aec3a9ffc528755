"""Argument checks for the LORD* front end.

The core recursions trust their inputs; these helpers run before them and
turn malformed arguments into ``ValueError`` with a message naming the
argument at fault.
"""

from __future__ import annotations

import warnings
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from online_fdr_analysis import config


def check_p_values(p_values: ArrayLike) -> NDArray[np.float64]:
    """Return p-values as a float array, or raise if any is invalid."""
    pvals = np.asarray(p_values, dtype=float).ravel()
    if pvals.size == 0:
        raise ValueError("p_values must not be empty")
    if not np.all(np.isfinite(pvals)):
        raise ValueError("p_values must be finite (no NaN or inf)")
    if np.any((pvals < 0) | (pvals > 1)):
        raise ValueError("p_values must lie in [0, 1]")
    return pvals


def check_alpha(alpha: float) -> float:
    if not np.isfinite(alpha) or alpha <= 0 or alpha > 1:
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")
    return float(alpha)


def check_w0(w0: Optional[float], alpha: float) -> float:
    """Default ``w0`` to ``alpha / 10``; otherwise require ``0 <= w0 <= alpha``."""
    if w0 is None:
        return config.W0_ALPHA_FRACTION * alpha
    if not np.isfinite(w0) or w0 < 0:
        raise ValueError(f"w0 must be non-negative, got {w0}")
    if w0 > alpha:
        raise ValueError(f"w0 must not be greater than alpha ({alpha}), got {w0}")
    if w0 == 0:
        warnings.warn(
            "w0 = 0: tests before the first visible rejection have level 0",
            UserWarning,
        )
    return float(w0)


def check_gammai(gammai: ArrayLike, n_tests: int) -> NDArray[np.float64]:
    """Validate a caller-supplied discount sequence against ``n_tests`` tests."""
    values = np.asarray(gammai, dtype=float).ravel()
    if values.size < n_tests:
        raise ValueError(
            f"gammai must have at least {n_tests} elements, got {values.size}"
        )
    if not np.all(np.isfinite(values)):
        raise ValueError("gammai must be finite")
    if np.any(values < 0):
        raise ValueError("All elements of gammai must be non-negative")
    if values.sum() > 1 + config.GAMMA_SUM_TOLERANCE:
        raise ValueError("The sum of the elements of gammai must be <= 1")
    if not np.any(values[:n_tests] > 0):
        warnings.warn(
            "gammai is zero over all tests: every test level will be 0",
            UserWarning,
        )
    return values


def _as_integer_array(values: ArrayLike, name: str) -> NDArray[np.int64]:
    array = np.asarray(values).ravel()
    if array.size and not np.all(np.isfinite(array.astype(float))):
        raise ValueError(f"{name} must be finite")
    if array.size and not np.all(np.equal(np.mod(array.astype(float), 1), 0)):
        raise ValueError(f"{name} must contain integers")
    array = array.astype(np.int64)
    if np.any(array < 0):
        raise ValueError(f"{name} must be non-negative")
    return array


def check_lordstar_version(
    n_tests: int,
    version: str,
    decision_times: Optional[ArrayLike] = None,
    lags: Optional[ArrayLike] = None,
    batch_sizes: Optional[ArrayLike] = None,
) -> Tuple[str, NDArray[np.int64]]:
    """Resolve the LORD* version and validate its schedule.

    Returns
    -------
    version : str
        Normalised version name.
    schedule : np.ndarray (int)
        Decision times, lags or batch sizes.
    """
    if not isinstance(version, str) or version.lower() not in config.LORDSTAR_VERSIONS:
        raise ValueError(
            f"Unknown LORD* version: {version!r}. "
            f"Supported versions: {', '.join(repr(v) for v in config.LORDSTAR_VERSIONS)}"
        )
    version = version.lower()

    if version == "async":
        if decision_times is None:
            raise ValueError("decision_times required for version='async'")
        schedule = _as_integer_array(decision_times, "decision_times")
        if schedule.size != n_tests:
            raise ValueError(
                f"decision_times must have one entry per p-value "
                f"({n_tests}), got {schedule.size}"
            )
        # A test cannot finish before it has started.
        if np.any(schedule <= np.arange(n_tests)):
            raise ValueError("decision_times[j] must be greater than j")

    elif version == "dep":
        if lags is None:
            raise ValueError("lags required for version='dep'")
        schedule = _as_integer_array(lags, "lags")
        if schedule.size != n_tests:
            raise ValueError(
                f"lags must have one entry per p-value ({n_tests}), got {schedule.size}"
            )
        # The visible window end (i - lags[i]) may never move backwards.
        window_end = np.maximum(np.arange(n_tests) - schedule, 0)
        if np.any(np.diff(window_end[1:]) < 0):
            raise ValueError(
                "lags may grow by at most one per test; "
                "visible history must not shrink"
            )

    else:
        if batch_sizes is None:
            raise ValueError("batch_sizes required for version='batch'")
        schedule = _as_integer_array(batch_sizes, "batch_sizes")
        if schedule.size == 0:
            raise ValueError("batch_sizes must not be empty")
        if int(schedule.sum()) != n_tests:
            raise ValueError(
                f"batch_sizes must sum to the number of p-values ({n_tests}), "
                f"got {int(schedule.sum())}"
            )

    return version, schedule


__all__ = [
    "check_p_values",
    "check_alpha",
    "check_w0",
    "check_gammai",
    "check_lordstar_version",
]
