"""Online FDR control for asynchronous, dependent and batched p-value streams.

This package implements the LORD* procedures (Zrnic et al. 2018), which set
each test's level from the rejections it is allowed to see.

Modules
-------
discount
    Discount sequences and the bounds-checked discount table
inversion
    Inversion of cumulative visible-rejection counts
visibility
    Visibility rules (decision times, lags, batch boundaries)
history
    Append-only rejection history of a single run
recursion
    Shared threshold recursion
lord_star
    The async, dep and batch procedures
progress
    Progress/cancellation checkpoint
validation
    Argument checks for the front end
dispatcher
    ``lord_star`` front end returning a DataFrame
"""

from .discount import WealthDiscountTable, lord_discount_sequence
from .inversion import invert_cumulative_counts
from .visibility import AsyncHorizonRule, BatchBoundaryRule, BatchIndexTable, LagRule
from .history import RejectionHistoryTracker
from .recursion import ThresholdRecursion, run_sequential_recursion
from .lord_star import (
    LordStarBatchResult,
    LordStarResult,
    lordstar_async,
    lordstar_batch,
    lordstar_dep,
)
from .progress import ProgressCheckpoint, RunCancelledError
from .dispatcher import lord_star

__all__ = [
    # Shared pieces
    "WealthDiscountTable",
    "lord_discount_sequence",
    "invert_cumulative_counts",
    "AsyncHorizonRule",
    "LagRule",
    "BatchBoundaryRule",
    "BatchIndexTable",
    "RejectionHistoryTracker",
    "ThresholdRecursion",
    "run_sequential_recursion",
    # Procedures
    "LordStarResult",
    "LordStarBatchResult",
    "lordstar_async",
    "lordstar_dep",
    "lordstar_batch",
    # Runtime
    "ProgressCheckpoint",
    "RunCancelledError",
    # Front end
    "lord_star",
]
