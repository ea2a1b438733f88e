"""Results accumulator: the running list of result sets a caller has collected.

Newer results are more recent and go first.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class ResultsAccumulator(ABC):
    """Receives every accepted result set. Failures never reach it."""

    @abstractmethod
    def prepend(self, items: Sequence[Any]) -> None:
        """Put `items` (in their order) ahead of everything collected so far."""


class InMemoryResultsAccumulator(ResultsAccumulator):
    def __init__(self, max_items: int | None = None):
        self._items: list[Any] = []
        self._max_items = max_items

    def prepend(self, items: Sequence[Any]) -> None:
        self._items[0:0] = copy.deepcopy(list(items))
        if self._max_items is not None:
            del self._items[self._max_items :]

    @property
    def items(self) -> list[Any]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
