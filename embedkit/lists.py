"""Singly linked lists: an unordered list and a list kept in sorted order."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from .arrays import numeric_compare

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]


def _merge(left: list[Any], right: list[Any], compare: Comparator) -> list[Any]:
    """Merge two runs; on a tie the element of the right run goes first."""
    first, second = deque(left), deque(right)
    merged: list[Any] = []
    while first and second:
        source = first if compare(first[0], second[0]) < 0 else second
        merged.append(source.popleft())
    merged.extend(first or second)
    return merged


def _merge_sort(items: list[Any], compare: Comparator) -> list[Any]:
    """Bottom-up merge sort, merging runs of doubling width."""
    width = 1
    while width < len(items):
        result: list[Any] = []
        for start in range(0, len(items), 2 * width):
            result.extend(
                _merge(
                    items[start:start + width],
                    items[start + width:start + 2 * width],
                    compare,
                )
            )
        items = result
        width *= 2
    return items


class LinkedList(Generic[T]):
    """An unordered list; new elements are added at the front."""

    def __init__(self, values: Iterable[T] = (), compare: Comparator = numeric_compare) -> None:
        self.compare = compare
        self._items: list[T] = []
        for value in values:
            self.add(value)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def add(self, value: T) -> None:
        """Put ``value`` at the front of the list."""
        self._items.insert(0, value)

    def add_if_not_member(self, value: T) -> bool:
        """Add ``value`` unless an equal element is present; return whether it was added."""
        if self.find_member(value) is not None:
            return False
        self.add(value)
        return True

    def concat(self, other: Iterable[T]) -> None:
        """Append the elements of ``other`` after the last element."""
        self._items.extend(list(other))

    def delete(self, value: T) -> None:
        """Remove the first element that is, or equals, ``value``."""
        position = next(
            (index for index, item in enumerate(self._items) if item is value or item == value),
            None,
        )
        if position is None:
            raise ValueError(f"{value!r} is not a member of the list")
        del self._items[position]

    def delete_if_member(self, value: T) -> T | None:
        """Remove and return the first element comparing equal to ``value``, if any."""
        position = next(
            (index for index, item in enumerate(self._items) if self.compare(item, value) == 0),
            None,
        )
        if position is None:
            return None
        return self._items.pop(position)

    def find_member(self, value: T) -> T | None:
        """The first element comparing equal to ``value``, or ``None``."""
        return next((item for item in self._items if self.compare(item, value) == 0), None)

    def sort(self) -> None:
        """Sort the list with a merge sort under the list's comparator."""
        self._items = _merge_sort(self._items, self.compare)

    def reverse(self) -> None:
        """Reverse the order of the elements."""
        self._items.reverse()

    def iter_equal(self, value: T, compare: Comparator | None = None) -> Iterator[T]:
        """Yield every element for which ``compare(element, value) == 0``."""
        cmp = self.compare if compare is None else compare
        for item in list(self._items):
            if cmp(item, value) == 0:
                yield item


class SortedList(Generic[T]):
    """A list kept in ascending order under its comparator."""

    def __init__(self, values: Iterable[T] = (), compare: Comparator = numeric_compare) -> None:
        self.compare = compare
        self._items: list[T] = []
        for value in values:
            self.add(value)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def _place(self, value: T) -> tuple[int, int]:
        """Index of the first element not less than ``value`` and its comparison result."""
        for index, item in enumerate(self._items):
            result = self.compare(item, value)
            if result >= 0:
                return index, result
        return len(self._items), -1

    def add(self, value: T) -> None:
        """Insert ``value`` before the first element not less than it."""
        index, _ = self._place(value)
        self._items.insert(index, value)

    def add_if_not_member(self, value: T) -> bool:
        """Insert ``value`` unless an equal element is present; return whether it was added."""
        index, result = self._place(value)
        if result == 0:
            return False
        self._items.insert(index, value)
        return True

    def delete_if_member(self, value: T) -> T | None:
        """Remove and return the first element comparing equal to ``value``, if any."""
        index, result = self._place(value)
        if result != 0:
            return None
        return self._items.pop(index)

    def find_member(self, value: T) -> T | None:
        """The first element comparing equal to ``value``, or ``None``."""
        index, result = self._place(value)
        return self._items[index] if result == 0 else None

    def iter_equal(self, value: T, compare: Comparator | None = None) -> Iterator[T]:
        """Yield the run of elements equal to ``value`` under ``compare``.

        Elements comparing less are skipped; the first comparing greater ends the run.
        """
        cmp = self.compare if compare is None else compare
        for item in list(self._items):
            result = cmp(item, value)
            if result < 0:
                continue
            if result > 0:
                return
            yield item