"""Binary max-heap of bars ordered by priority."""

from __future__ import annotations

from typing import Any, Iterator


class PriorityQueue:
    """Heap whose items carry mutable ``priority`` and ``index`` attributes.

    The item with the greatest priority pops first. Each item's ``index``
    tracks its position in the heap, and is set to -1 once popped.
    """

    def __init__(self, items=None):
        self._items: list[Any] = []
        for item in items or ():
            self.push(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def _less(self, i: int, j: int) -> bool:
        return self._items[i].priority > self._items[j].priority

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        items[i].index = i
        items[j].index = j

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if parent == j or not self._less(j, parent):
                break
            self._swap(parent, j)
            j = parent

    def _down(self, i0: int, n: int) -> bool:
        i = i0
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            j = left
            right = left + 1
            if right < n and self._less(right, left):
                j = right
            if not self._less(j, i):
                break
            self._swap(i, j)
            i = j
        return i > i0

    def push(self, item) -> None:
        """Add an item."""
        item.index = len(self._items)
        self._items.append(item)
        self._up(len(self._items) - 1)

    def pop(self):
        """Remove and return the item with the greatest priority."""
        if not self._items:
            raise IndexError("pop from empty priority queue")
        n = len(self._items) - 1
        self._swap(0, n)
        self._down(0, n)
        item = self._items.pop()
        item.index = -1
        return item

    def fix(self, index: int) -> None:
        """Restore heap order after the item at ``index`` changed priority."""
        if not 0 <= index < len(self._items):
            raise IndexError("priority queue index out of range")
        if not self._down(index, len(self._items)):
            self._up(index)