"""Cooperative progress and cancellation checkpoint for long LORD* runs.

The recursions call a zero-argument hook once per unit of inner work. A
:class:`ProgressCheckpoint` is such a hook: it advances an optional tqdm bar
and raises :class:`RunCancelledError` once the supplied event is set, which
aborts the whole run without returning partial history.
"""

from __future__ import annotations

import threading
from typing import Optional

from tqdm import tqdm


class RunCancelledError(RuntimeError):
    """Raised from a checkpoint when the caller cancelled the run."""


class ProgressCheckpoint:
    """Progress/cancellation hook.

    Parameters
    ----------
    total
        Expected number of work units (sizes the progress bar only).
    display_progress
        Show a tqdm progress bar.
    cancel_event
        When set, the next call raises :class:`RunCancelledError`.

    Examples
    --------
    >>> import threading
    >>> event = threading.Event()
    >>> with ProgressCheckpoint(total=2, cancel_event=event) as checkpoint:
    ...     checkpoint()
    ...     checkpoint.n_calls
    1
    """

    def __init__(
        self,
        total: Optional[int] = None,
        display_progress: bool = False,
        cancel_event: Optional[threading.Event] = None,
        desc: str = "LORD*",
    ):
        self.cancel_event = cancel_event
        self.n_calls = 0
        self._bar = tqdm(total=total, disable=not display_progress, desc=desc)

    def __call__(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            self.close()
            raise RunCancelledError(
                f"run cancelled after {self.n_calls} units of work"
            )
        self.n_calls += 1
        self._bar.update(1)

    def close(self) -> None:
        self._bar.close()

    def __enter__(self) -> "ProgressCheckpoint":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ProgressCheckpoint", "RunCancelledError"]
