"""Visibility rules for the LORD* procedures.

A visibility rule answers one question: at step ``step``, may the outcome of
the earlier unit ``earlier`` be used? Units are single tests for the
asynchronous and dependency versions and whole mini-batches for the batch
version. The rule never looks at the outcome itself; the rejection history
tracker combines the rule with the recorded decisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray


class VisibilityRule(Protocol):
    """Predicate ``rule(step, earlier) -> bool`` over unit indices."""

    def __call__(self, step: int, earlier: int) -> bool: ...


class AsyncHorizonRule:
    """Outcome of test ``j`` is visible from step ``horizons[j]`` onwards.

    ``horizons = [1, 2, ..., N]`` makes every outcome visible to the very
    next test, which is ordinary synchronous online testing.
    """

    def __init__(self, horizons: ArrayLike):
        self.horizons = np.asarray(horizons, dtype=np.int64)

    def __call__(self, step: int, earlier: int) -> bool:
        return bool(self.horizons[earlier] <= step)


class LagRule:
    """Test ``step`` sees only tests more than ``lags[step]`` steps behind it.

    A lag of zero sees every strictly earlier test; a lag at least as large
    as the step index sees nothing.
    """

    def __init__(self, lags: ArrayLike):
        self.lags = np.asarray(lags, dtype=np.int64)

    def __call__(self, step: int, earlier: int) -> bool:
        return bool(earlier < step - self.lags[step])


class BatchBoundaryRule:
    """Batch ``step`` sees every completed batch and nothing inside itself."""

    def __call__(self, step: int, earlier: int) -> bool:
        return earlier < step


@dataclass(frozen=True)
class BatchIndexTable:
    """Mapping between batch indices and global test-index ranges.

    Attributes
    ----------
    sizes : np.ndarray
        Number of tests in each batch.
    ends : np.ndarray
        Inclusive prefix sums of ``sizes``: ``ends[b]`` is the global index
        of the first test after batch ``b``.
    """

    sizes: NDArray[np.int64]
    ends: NDArray[np.int64]

    @classmethod
    def from_sizes(cls, batch_sizes: ArrayLike) -> "BatchIndexTable":
        sizes = np.asarray(batch_sizes, dtype=np.int64)
        return cls(sizes=sizes, ends=np.cumsum(sizes))

    @property
    def n_batches(self) -> int:
        return int(self.sizes.size)

    @property
    def max_size(self) -> int:
        return int(self.sizes.max()) if self.sizes.size else 0

    def start(self, batch: int) -> int:
        """Global index of the first test in ``batch``."""
        return int(self.ends[batch - 1]) if batch > 0 else 0

    def end(self, batch: int) -> int:
        """Global index of the first test after ``batch``."""
        return int(self.ends[batch])

    def global_index(self, batch: int, position: int) -> int:
        return self.start(batch) + position


__all__ = [
    "VisibilityRule",
    "AsyncHorizonRule",
    "LagRule",
    "BatchBoundaryRule",
    "BatchIndexTable",
]
