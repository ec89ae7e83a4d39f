"""Bounded window of approved transaction amounts.

The window is FIFO: once ``max_size`` amounts are held, each append evicts
the oldest one. Statistics are recomputed over the current window on demand;
the window is small enough that incremental bookkeeping buys nothing.
"""

import math
from collections import deque
from collections.abc import Iterable, Iterator

import numpy as np


class TransactionHistory:
    def __init__(self, max_size: int = 100, amounts: Iterable[float] = ()) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._amounts: deque[float] = deque(maxlen=max_size)
        self.extend(amounts)

    @property
    def max_size(self) -> int:
        return self._amounts.maxlen

    def __len__(self) -> int:
        return len(self._amounts)

    def __iter__(self) -> Iterator[float]:
        return iter(self._amounts)

    def append(self, amount: float) -> None:
        value = float(amount)
        if not math.isfinite(value):
            raise ValueError(f"History amounts must be finite, got {amount!r}")
        self._amounts.append(value)

    def extend(self, amounts: Iterable[float]) -> None:
        for amount in amounts:
            self.append(amount)

    def clear(self) -> None:
        self._amounts.clear()

    def snapshot(self) -> list[float]:
        """Oldest-first copy of the window."""
        return list(self._amounts)

    def mean(self) -> float:
        if not self._amounts:
            return 0.0
        return float(np.mean(np.fromiter(self._amounts, dtype=float)))

    def stddev(self) -> float:
        """Sample standard deviation (divisor n-1); 0.0 below two samples."""
        if len(self._amounts) <= 1:
            return 0.0
        values = np.fromiter(self._amounts, dtype=float)
        # Identical amounts have no spread; skip float round-off in the mean
        if values.min() == values.max():
            return 0.0
        return float(np.std(values, ddof=1))
