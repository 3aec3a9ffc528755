"""Append-only rejection history for a single LORD* run."""

from __future__ import annotations

from typing import Callable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .inversion import invert_cumulative_counts
from .visibility import VisibilityRule


class RejectionHistoryTracker:
    """Rejections per unit and the cumulative count visible at each step.

    One tracker belongs to one run. Units (tests or batches) are recorded in
    order and never revised; every call to :meth:`update` appends one entry
    to the cumulative visible-count sequence.

    Parameters
    ----------
    rule
        Visibility rule deciding which earlier units a step may use.
    checkpoint
        Optional hook invoked once per scanned earlier unit. Raising from it
        aborts the scan.
    """

    def __init__(
        self,
        rule: VisibilityRule,
        checkpoint: Optional[Callable[[], None]] = None,
    ):
        self.rule = rule
        self.checkpoint = checkpoint
        self._rejections: List[int] = []
        self._visible_counts: List[int] = []

    @property
    def n_recorded(self) -> int:
        return len(self._rejections)

    @property
    def visible_counts(self) -> NDArray[np.int64]:
        return np.asarray(self._visible_counts, dtype=np.int64)

    def record(self, n_rejections: int) -> None:
        """Record the number of rejections of the next unit (0/1 for a test)."""
        self._rejections.append(int(n_rejections))

    def update(self, step: int) -> int:
        """Count rejections visible at ``step`` and append the count."""
        count = 0
        for earlier in range(min(step, len(self._rejections))):
            if self.checkpoint is not None:
                self.checkpoint()
            if self._rejections[earlier] and self.rule(step, earlier):
                count += self._rejections[earlier]
        self._visible_counts.append(count)
        return count

    def visible_positions(self) -> NDArray[np.intp]:
        """Positions in the count sequence where each visible rejection appeared."""
        return invert_cumulative_counts(self._visible_counts)


__all__ = ["RejectionHistoryTracker"]
