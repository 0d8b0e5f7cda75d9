"""Array algorithms: quicksort, heapsort, binary search, ring queue and array heap."""

from __future__ import annotations

from typing import Any, Callable, Generic, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]


def numeric_compare(a: Any, b: Any) -> int:
    """Three-way comparison: 1 if ``a > b``, -1 if ``a < b``, otherwise 0."""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


def _swap(items: MutableSequence[Any], i: int, j: int) -> None:
    items[i], items[j] = items[j], items[i]


def _heap_down(items: MutableSequence[Any], index: int, limit: int, compare: Comparator) -> None:
    """Sift ``items[index]`` down within ``items[:limit]``."""
    largest = index
    while True:
        current = largest
        left = 2 * current + 1
        right = left + 1
        if left < limit:
            if compare(items[largest], items[left]) < 0:
                largest = left
            if right < limit and compare(items[largest], items[right]) < 0:
                largest = right
        if largest == current:
            return
        _swap(items, current, largest)


def quick_sort(items: MutableSequence[Any], compare: Comparator = numeric_compare) -> None:
    """Sort ``items`` in place with a non-recursive quicksort."""
    stack = [(0, len(items))]
    while stack:
        start, end = stack.pop()
        while end - start > 2:
            pivot = start
            i = start + 1
            j = end - 1
            while i < j:
                while i <= j and compare(items[i], items[pivot]) <= 0:
                    i += 1
                if i > j:
                    # everything left over is no greater than the pivot
                    _swap(items, j, pivot)
                    i = j
                else:
                    while i <= j and compare(items[j], items[pivot]) >= 0:
                        j -= 1
                    if i > j:
                        # everything left over is greater than the pivot
                        _swap(items, j, pivot)
                        i = j
                    elif i < j:
                        _swap(items, i, j)
                        if i + 2 < j:
                            i += 1
                            j -= 1
                        elif i + 1 < j:
                            i += 1
            # the pivot now sits at items[i] == items[j]
            if i - start > 1 and end - j > 1:
                if i - start < end - j - 1:
                    stack.append((j + 1, end))
                    end = i
                else:
                    stack.append((start, i))
                    start = j + 1
            elif i - start > 1:
                end = i
            else:
                start = j + 1
        if end - start == 2 and compare(items[start], items[end - 1]) > 0:
            _swap(items, start, end - 1)


def heap_sort(items: MutableSequence[Any], compare: Comparator = numeric_compare) -> None:
    """Sort ``items`` in place with heapsort."""
    size = len(items)
    for k in range(size // 2, -1, -1):
        _heap_down(items, k, size, compare)
    for k in range(size - 1, -1, -1):
        _swap(items, 0, k)
        _heap_down(items, 0, k, compare)


def binary_search(
    items: Sequence[Any],
    key: Any,
    start: int = 0,
    end: int | None = None,
    compare: Comparator = numeric_compare,
) -> tuple[bool, int]:
    """Search the sorted slice ``items[start:end + 1]`` for ``key``.

    Returns ``(True, index)`` of a matching element, or ``(False, index)``
    where ``index`` is the place ``key`` would be inserted.
    """
    low = start
    high = len(items) - 1 if end is None else end
    while low <= high:
        middle = (low + high) // 2
        result = compare(items[middle], key)
        if result == 0:
            return True, middle
        if result < 0:
            low = middle + 1
        else:
            high = middle - 1
    return False, high + 1


class RingQueue(Generic[T]):
    """A first-in first-out queue in a fixed array of ``slots`` cells.

    One cell always stays free, so the queue holds at most ``slots - 1`` items.
    """

    def __init__(self, slots: int = 101) -> None:
        if slots < 2:
            raise ValueError("a ring queue needs at least two slots")
        self.slots = slots
        self._cells: list[Any] = [None] * slots
        self._head = 0
        self._tail = 0

    def is_empty(self) -> bool:
        return self._head == self._tail

    def is_full(self) -> bool:
        return self._head == (self._tail + 1) % self.slots

    def __len__(self) -> int:
        return (self._tail - self._head) % self.slots

    def add(self, item: T) -> None:
        """Append ``item`` at the back of the queue."""
        if self.is_full():
            raise IndexError("the queue is full")
        self._cells[self._tail] = item
        self._tail = (self._tail + 1) % self.slots

    def first(self) -> T:
        """The item at the front of the queue."""
        if self.is_empty():
            raise IndexError("the queue is empty")
        return self._cells[self._head]

    def delete(self) -> None:
        """Drop the item at the front of the queue."""
        if self.is_empty():
            raise IndexError("the queue is empty")
        self._cells[self._head] = None
        self._head = (self._head + 1) % self.slots


class ArrayHeap(Generic[T]):
    """A priority queue kept in a fixed array of ``slots`` cells.

    The element that compares greatest is at the front.
    """

    def __init__(self, slots: int = 101, compare: Comparator = numeric_compare) -> None:
        if slots < 1:
            raise ValueError("a heap needs at least one slot")
        self.slots = slots
        self.compare = compare
        self._cells: list[Any] = [None] * slots
        self._count = 0

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self.slots

    def __len__(self) -> int:
        return self._count

    def add(self, item: T) -> None:
        """Insert ``item`` and move it up towards the front."""
        if self.is_full():
            raise IndexError("the heap is full")
        cells = self._cells
        cells[self._count] = item
        index = self._count
        self._count += 1
        while index > 0 and self.compare(cells[index // 2], cells[index]) < 0:
            _swap(cells, index // 2, index)
            index //= 2

    def first(self) -> T:
        """The item at the front of the heap."""
        if self.is_empty():
            raise IndexError("the heap is empty")
        return self._cells[0]

    def delete(self) -> None:
        """Remove the item at the front of the heap."""
        if self.is_empty():
            raise IndexError("the heap is empty")
        self._count -= 1
        cells = self._cells
        cells[0] = cells[self._count]
        cells[self._count] = None
        _heap_down(cells, 0, self._count, self.compare)