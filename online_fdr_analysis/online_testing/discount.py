"""Wealth discount sequences for the LORD family of online procedures.

The discount sequence (gamma_i) distributes the significance budget over step
offsets: the wealth earned by a rejection that became visible ``k`` steps ago
is spent at rate ``gamma[k]``. The sequence is supplied by the caller and is
read-only for the whole run.

References
----------
Javanmard, A. and Montanari, A. (2018). Online rules for control of false
discovery rate and false discovery exceedance. Annals of Statistics, 46(2),
526-554.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from online_fdr_analysis import config


def lord_discount_sequence(n_tests: int) -> NDArray[np.float64]:
    """Default LORD discount sequence of length ``n_tests``.

    gamma_j = C * log(max(j, 2)) / (j * exp(sqrt(log(j)))) for j = 1..n_tests,
    with C = ``config.LORD_GAMMA_CONSTANT`` (Javanmard & Montanari, eq. 31).

    Examples
    --------
    >>> gammai = lord_discount_sequence(3)
    >>> bool(gammai[0] > gammai[1] > gammai[2])
    True
    """
    if n_tests < 0:
        raise ValueError(f"n_tests must be non-negative, got {n_tests}")

    j = np.arange(1, n_tests + 1, dtype=float)
    return (
        config.LORD_GAMMA_CONSTANT
        * np.log(np.maximum(j, 2.0))
        / (j * np.exp(np.sqrt(np.log(j))))
    )


class WealthDiscountTable:
    """Read-only, bounds-checked view over a discount sequence.

    Lookups outside ``[0, len(table))`` raise ``IndexError`` instead of
    wrapping around the way negative numpy indices would.

    Examples
    --------
    >>> table = WealthDiscountTable([0.5, 0.3, 0.2])
    >>> table[1]
    0.3
    >>> table[-1]
    Traceback (most recent call last):
    ...
    IndexError: discount offset -1 outside table of length 3
    """

    def __init__(self, gammai: ArrayLike):
        values = np.array(gammai, dtype=float).ravel()
        values.setflags(write=False)
        self._values = values

    @property
    def values(self) -> NDArray[np.float64]:
        return self._values

    def __len__(self) -> int:
        return int(self._values.size)

    def __getitem__(self, offset: int) -> float:
        offset = int(offset)
        if offset < 0 or offset >= self._values.size:
            raise IndexError(
                f"discount offset {offset} outside table of length {self._values.size}"
            )
        return float(self._values[offset])

    def __repr__(self) -> str:
        return f"WealthDiscountTable(n={len(self)})"


__all__ = ["lord_discount_sequence", "WealthDiscountTable"]
