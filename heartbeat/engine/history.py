from __future__ import annotations

from collections import deque
from collections.abc import Iterator

DEFAULT_CAPACITY = 30


class HistoryWindow:
    """Bounded FIFO of numeric samples, oldest first.

    Pushing past ``capacity`` evicts the oldest sample.
    """

    __slots__ = ("capacity", "_buf")

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._buf: deque[float] = deque(maxlen=capacity)

    def push(self, sample: float) -> None:
        self._buf.append(sample)

    def mean(self) -> float:
        """Arithmetic mean of the current samples. Callers must check ``len()`` first."""
        if not self._buf:
            raise ValueError("mean of an empty history window")
        return sum(self._buf) / len(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def __iter__(self) -> Iterator[float]:
        return iter(self._buf)

    def __repr__(self) -> str:
        return f"HistoryWindow(capacity={self.capacity}, samples={list(self._buf)!r})"
